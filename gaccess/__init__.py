"""G-access: bearer-token relay to Gemini plus a multi-chapter article generator."""

__version__ = "0.1.0"
