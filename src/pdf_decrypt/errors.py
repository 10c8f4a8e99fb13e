class PdfDecryptError(Exception):
    """Base class for fatal errors that abort a run."""


class ConfigError(PdfDecryptError):
    """Effective configuration could not be resolved."""


class ProvisionError(PdfDecryptError):
    """The bundled qpdf executable could not be extracted."""


class UnsupportedPlatformError(ProvisionError):
    """No bundled executable matches the running OS/architecture."""


class DiscoveryError(PdfDecryptError):
    """Input files could not be enumerated."""
