"""Report an Abiotic Factor server's session short code to chat users."""

__version__ = "1.0.0"
