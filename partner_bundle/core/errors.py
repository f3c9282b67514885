class BundleError(Exception):
    """Any condition that must stop the run."""


class MissingPreconditionError(BundleError):
    """A required input file is absent."""


class IdempotencyError(BundleError):
    """The output of an expensive step already exists and would be overwritten."""


class ExternalToolError(BundleError):
    """The container engine, archiver or filesystem reported a failure."""
