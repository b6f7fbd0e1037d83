"""perfgate - benchmark regression gate for CI."""

__version__: str = "0.1.0"
