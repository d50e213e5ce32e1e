"""Typed errors raised by shadowcore.

Geometric degeneracy is never an error: it shows up as NaN values in the
results. "No intersection" and "no second owning triangle" are sentinels.
Only broken input contracts and bad configuration raise.
"""


class ShadowCoreError(Exception):
    """Base error for the package."""


class InputContractError(ShadowCoreError, ValueError):
    """Caller-supplied buffers break the input contract.

    Raised for out-of-range or negative vertex indices, index buffers whose
    length is not a multiple of 3, malformed vertex or transform buffers and
    output buffers that are too small. Raised before any work is done.
    """


class ConfigurationError(ShadowCoreError, ValueError):
    """Invalid configuration value (for example an unparsable environment flag)."""
