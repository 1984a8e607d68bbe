"""Classify incidents against the ordered signature table."""

from kbdiag.core.logger.logger import get_logger
from kbdiag.diagnostic.models import Classification, Incident
from kbdiag.diagnostic.signatures import (
    DEFAULT_CLASSIFICATION,
    DEFAULT_SIGNATURES,
    SignatureTable,
)

logger = get_logger(__name__)


class Classifier:
    """Maps incident text to exactly one classification.

    Signatures are tried in table order and the first one whose pattern
    occurs anywhere in the text wins.
    """

    def __init__(
        self,
        table: SignatureTable | None = None,
        default: Classification = DEFAULT_CLASSIFICATION,
    ) -> None:
        """Initialize the classifier.

        Args:
            table: Signature table. Uses the kernel build table if not provided.
            default: Classification returned when no signature matches.
        """
        self.table = table if table is not None else DEFAULT_SIGNATURES
        self.default = default

    def classify(self, incident: Incident | str) -> Classification:
        """Classify an incident or a block of text.

        Args:
            incident: Incident, or its already concatenated text.

        Returns:
            Classification of the first matching signature, or the default.
        """
        text = incident.text if isinstance(incident, Incident) else incident

        for priority, signature in enumerate(self.table):
            if signature.matches(text):
                logger.debug(f"Matched signature #{priority}: {signature.category}")
                return Classification(
                    category=signature.category,
                    remediation=signature.remediation,
                )

        return self.default
