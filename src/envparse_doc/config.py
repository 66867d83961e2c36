"""Configuration for envparse-doc scans."""

from dataclasses import dataclass, field
from typing import List
import os

DEFAULT_PACKAGE = "@fluidware-it/saddlebag"


@dataclass
class ScanConfig:
    """Scan settings; defaults can be overridden through the environment."""

    # Accessor namespace the calls go through (EnvParse.envInt(...))
    namespace: str = field(
        default_factory=lambda: os.getenv("ENVPARSE_DOC_NAMESPACE", "EnvParse")
    )

    # Package whose dependents are scanned in dependency mode
    package: str = field(
        default_factory=lambda: os.getenv("ENVPARSE_DOC_PACKAGE", DEFAULT_PACKAGE)
    )

    # Third-party package store walked in dependency mode
    store: str = field(
        default_factory=lambda: os.getenv("ENVPARSE_DOC_STORE", "node_modules")
    )

    # Source file extensions scanned in directories
    extensions: List[str] = field(default_factory=lambda: [".js"])

    # Output entries in alphabetical order
    sort: bool = True
