"""Failure signatures for Android kernel builds.

The table order is the match priority: the classifier returns the first
signature whose pattern occurs in an incident, so more specific shapes
must be declared before broader ones.
"""

from collections.abc import Iterator, Sequence
from typing import overload

from kbdiag.diagnostic.models import Classification, Signature

DEFAULT_CLASSIFICATION = Classification(
    category="Uncommon Error",
    remediation=(
        "Please follow the compilation output error results and try to "
        "resolve using search engines"
    ),
)


class SignatureTable(Sequence[Signature]):
    """Immutable, ordered collection of failure signatures."""

    def __init__(self, signatures: Sequence[Signature] = ()) -> None:
        self._signatures: tuple[Signature, ...] = tuple(signatures)

    @overload
    def __getitem__(self, index: int) -> Signature: ...

    @overload
    def __getitem__(self, index: slice) -> "SignatureTable": ...

    def __getitem__(self, index: int | slice) -> "Signature | SignatureTable":
        if isinstance(index, slice):
            return SignatureTable(self._signatures[index])
        return self._signatures[index]

    def __len__(self) -> int:
        return len(self._signatures)

    def __iter__(self) -> Iterator[Signature]:
        return iter(self._signatures)

    def __repr__(self) -> str:
        return f"SignatureTable({len(self)} signatures)"

    def categories(self) -> list[str]:
        """Category labels in priority order (may repeat)."""
        return [signature.category for signature in self._signatures]


DEFAULT_SIGNATURES = SignatureTable(
    [
        Signature(
            pattern=r"No such file or directory",
            category="Missing Header or Source File",
            remediation=(
                "Check if the file path is correct, or if required development libraries "
                "are missing (e.g., libssl-dev, zlib1g-dev)."
            ),
        ),
        Signature(
            pattern=r"undefined reference to",
            category="Link Error: Missing Library or Function",
            remediation=(
                "Check if required libraries are missing (e.g., -lssl, -lcrypto), if library "
                "paths are in LDFLAGS/LDLIBS, or if function names are misspelled."
            ),
        ),
        Signature(
            pattern=r"unrecognized command line option",
            category="Compiler Option Not Supported",
            remediation=(
                "Your compiler version may be too old or too new. Check the options passed to "
                "the compiler in the Makefile for compatibility with your compiler version. "
                "Consider upgrading or downgrading the toolchain."
            ),
        ),
        Signature(
            pattern=r"misleading-indentation",
            category="Code Indentation Does Not Match Logic",
            remediation=(
                "This is a code style/logic potential error. Add braces '{}' after 'if', 'for', "
                "'while' statements to clarify code block scope. Or disable this warning "
                "(not recommended)."
            ),
        ),
        Signature(
            pattern=r"type specifier missing",
            category="C Language Type Declaration Missing",
            remediation=(
                "Variable or function declarations may be missing types (e.g., int). For kernel "
                "modules, it could be missing headers or ordering issues, or API changes between "
                "kernel versions."
            ),
        ),
        Signature(
            pattern=r"make\[\d+\]:.*Error \d+",
            category="Makefile Build Error",
            remediation=(
                "This is a Makefile rule execution failure. Check the specific error messages "
                "above, usually a subcommand (e.g., 'gcc', 'ld', 'sh') returned a non-zero "
                "status code."
            ),
        ),
        Signature(
            pattern=r"target emulation unknown",
            category="Linker Emulation Mode Error",
            remediation=(
                "Your linker (ld) does not recognize the specific emulation mode. Check if LLVM "
                "and GNU toolchains are mixed, or ensure LD variable correctly points to "
                "LLVM's lld."
            ),
        ),
        Signature(
            pattern=r"cannot open.*\.gz",
            category="File Missing (Configuration May Not Be Generated)",
            remediation=(
                "Check if 'make defconfig' or your device-specific config has been run. If "
                "'make mrproper' was executed previously, reconfiguration is needed."
            ),
        ),
        Signature(
            pattern=r"makes pointer from integer without a cast",
            category="Type Conversion Error (Pointer and Integer)",
            remediation=(
                "This is a severe type mismatch. Usually the function return type does not match "
                "the expected type (e.g., returning int but expecting pointer). May need to "
                "modify source code or use a more compatible compiler."
            ),
        ),
        Signature(
            pattern=r"MODULE_IMPORT_NS\(VFS_internal_I_am_really_a_filesystem_and_am_NOT_a_driver\)",
            category="Clang Version Anomaly",
            remediation=(
                "This is a compiler and KernelSU compatibility issue, usually occurs with "
                "KernelSU official version and SukiSU-Ultra. For official version, you can "
                "choose the old v0.9.5 version; for SukiSU-Ultra, it is generally recommended "
                "to switch to a different KernelSU branch."
            ),
        ),
        Signature(
            pattern=r"not found \(required by clang\)",
            category="Clang Version Anomaly",
            remediation=(
                "The current build system version is too old. If using 20.04, please use "
                "22.04, otherwise use latest."
            ),
        ),
        Signature(
            pattern=r"multiple definition of 'yylloc'",
            category="Kernel Defect",
            remediation=(
                "Modify YYLTYPE yylloc to extern YYLTYPE yylloc in "
                "scripts/dtc/dtc-lexer.lex.c_shipped"
            ),
        ),
        Signature(
            pattern=r"assembler command failed with exit code 1",
            category="Clang Compiler Error",
            remediation="Switch to a different Clang compiler version",
        ),
        Signature(
            pattern=r"incompatible pointer types passing 'atomic_long_t \*'",
            category="Source Code Pointer Type Error",
            remediation=(
                "Usually occurs after manual patching of cred.h, replace atomic_inc_not_zero "
                "with atomic_long_inc_not_zero in the code"
            ),
        ),
        Signature(
            pattern=r"-Werror",
            category="Warning Treated as Error",
            remediation=(
                "The compiler is treating warnings as errors due to -Werror flag. Either fix the "
                "underlying warning, or temporarily remove -Werror from CFLAGS/KBUILD_CFLAGS in "
                "the Makefile to allow compilation with warnings."
            ),
        ),
        Signature(
            pattern=r"implicit declaration of function",
            category="Implicit Function Declaration",
            remediation=(
                "A function is being used without being declared first. Include the proper "
                "header file, or add a function declaration/prototype before use. This may also "
                "indicate an API change in newer kernel versions."
            ),
        ),
        Signature(
            pattern=r"array subscript.*is outside array bounds",
            category="Array Index Out of Bounds",
            remediation=(
                "Accessing an array element outside its declared size. Check array bounds and "
                "ensure indices are within valid range [0, size-1]. This could be a buffer "
                "overflow risk."
            ),
        ),
        Signature(
            pattern=r"division by zero",
            category="Division by Zero",
            remediation=(
                "Code attempts to divide by zero. Add proper checks to ensure the divisor is not "
                "zero before performing division operations."
            ),
        ),
        Signature(
            pattern=r"null pointer dereference",
            category="Null Pointer Dereference",
            remediation=(
                "Attempting to access memory through a null pointer. Add null checks before "
                "dereferencing pointers, or ensure proper initialization before use."
            ),
        ),
        Signature(
            pattern=r"incompatible implicit declaration",
            category="Incompatible Implicit Declaration",
            remediation=(
                "Function was implicitly declared with a signature that does not match its "
                "actual definition. Include the correct header or add a proper function "
                "prototype."
            ),
        ),
        Signature(
            pattern=r"unused variable",
            category="Unused Variable",
            remediation=(
                "A variable is declared but never used. Either use the variable, remove it, or "
                "mark it with __maybe_unused attribute to suppress the warning."
            ),
        ),
        Signature(
            pattern=r"uninitialized variable",
            category="Uninitialized Variable",
            remediation=(
                "A variable is being used before being initialized. Initialize the variable at "
                "declaration or before first use."
            ),
        ),
        Signature(
            pattern=r"dereferencing pointer to incomplete type",
            category="Dereferencing Incomplete Type",
            remediation=(
                "Attempting to access members of a struct/union that has not been fully defined. "
                "Include the header file containing the complete type definition."
            ),
        ),
        Signature(
            pattern=r"conflicting types",
            category="Conflicting Types",
            remediation=(
                "A function or variable has been declared with different types in different "
                "places. Ensure all declarations match the definition exactly."
            ),
        ),
        Signature(
            pattern=r"redefinition of ",
            category="Symbol Redefinition",
            remediation=(
                "A function, variable, or macro has been defined multiple times. Check for "
                "duplicate definitions or include guards in header files."
            ),
        ),
        Signature(
            pattern=r"deprecated",
            category="Deprecated API Usage",
            remediation=(
                "Using a deprecated function or feature. Update the code to use the recommended "
                "replacement API or suppress with -Wno-deprecated-declarations (not recommended "
                "for long-term)."
            ),
        ),
        Signature(
            pattern=r"overflow in conversion",
            category="Integer Overflow in Conversion",
            remediation=(
                "A value is being converted to a type that cannot hold it. Check value ranges "
                "and use appropriate data types or add bounds checking."
            ),
        ),
        Signature(
            pattern=r"shift count overflow",
            category="Bit Shift Overflow",
            remediation=(
                "The shift amount exceeds the bit width of the type. Ensure shift counts are "
                "less than the types bit width (e.g., < 32 for int32)."
            ),
        ),
        Signature(
            pattern=r"cast from pointer to integer of different size",
            category="Pointer to Integer Size Mismatch",
            remediation=(
                "Converting a pointer to an integer type with different size. Use uintptr_t or "
                "intptr_t types which are guaranteed to hold pointer values."
            ),
        ),
        Signature(
            pattern=r"variable length array",
            category="Variable Length Array (VLA) Used",
            remediation=(
                "Using VLA which may cause stack overflow. Consider using dynamic allocation "
                "(kmalloc/vmalloc for kernel) instead, or ensure size is bounded."
            ),
        ),
        Signature(
            pattern=r"taking address of temporary",
            category="Address of Temporary Value",
            remediation=(
                "Attempting to take the address of a temporary/rvalue. Store the value in a "
                "variable first, then take its address."
            ),
        ),
        Signature(
            pattern=r"control reaches end of non-void function",
            category="Missing Return Statement",
            remediation=(
                "A non-void function may reach the end without returning a value. Add a return "
                "statement at the end of all code paths."
            ),
        ),
        Signature(
            pattern=r"comparison of integer expressions of different signedness",
            category="Signed/Unsigned Comparison",
            remediation=(
                "Comparing signed and unsigned integers. Cast one operand to match the others "
                "type, or ensure consistent types throughout."
            ),
        ),
        Signature(
            pattern=r"result of operation is still indeterminate",
            category="Sequence Point Violation",
            remediation=(
                "Undefined behavior due to multiple modifications between sequence points. "
                "Break the expression into multiple statements."
            ),
        ),
        Signature(
            pattern=r"stack-protector",
            category="Stack Protection Enabled But Failed",
            remediation=(
                "Stack smashing detected or stack protector instrumentation failed. Check for "
                "buffer overflows in the code, or disable with -fno-stack-protector (not "
                "recommended)."
            ),
        ),
        Signature(
            pattern=r"clock skew detected",
            category="Clock Skew Detected",
            remediation=(
                "File timestamps are in the future. Synchronize system clock or touch the "
                "affected files to update timestamps."
            ),
        ),
    ]
)
