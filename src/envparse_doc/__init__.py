"""Document EnvParse environment variables declared in JavaScript/TypeScript sources."""

__version__ = "0.1.0"
