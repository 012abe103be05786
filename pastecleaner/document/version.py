"""Document version gate.

Only the major component of protocol.version is checked; minor and
build numbers are informational.
"""
from pastecleaner.core.constants import SUPPORTED_DOCUMENT_MAJOR
from pastecleaner.core.errors import NotARecognizedDocument, UnsupportedVersion
from pastecleaner.document.model import EntityDocument


def check_version(document: EntityDocument, supported: int = SUPPORTED_DOCUMENT_MAJOR) -> int:
    """Check the document's major version.

    Returns:
        The document's major version

    Raises:
        NotARecognizedDocument: If the major version field is absent or not a number
        UnsupportedVersion: If the major version differs from ``supported``
    """
    raw = document.major_version
    if raw is None or isinstance(raw, bool):
        raise NotARecognizedDocument("Input file is not a copied base: no protocol.version.Major")
    try:
        major = int(raw)
    except (TypeError, ValueError) as e:
        raise NotARecognizedDocument(
            f"Input file is not a copied base: invalid major version {raw!r}"
        ) from e
    if major != supported:
        raise UnsupportedVersion(major, supported)
    return major
