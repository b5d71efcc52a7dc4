"""Financial reporting console: organization admin and profitability reports over a remote API."""

__version__ = "0.1.0"
