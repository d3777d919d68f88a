"""
octasm - Configuration
======================

Assembler configuration. Values come from:
- Default values (defined here)
- Environment variables (AssemblerConfig.from_env)
- Command-line options (applied by the CLI on top of the above)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os


#: Stdout formats understood by the CLI and the assembler writers.
OUTPUT_FORMATS = ("hex", "bits")


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        max_depth: Maximum nesting of sub-statement references while
            encoding (default: 8). The built-in table nests one level
            (jz -> _imm); the limit stops self-referencing definitions.
        strict: Report unmatched statements as errors instead of
            warnings (default: False)
        max_errors: Errors collected before giving up (default: 100)
        definitions_path: Alternative "FORMAT ; ENCODING" definition file.
            None selects the built-in table.
        output_format: Format used when printing code, "hex" or "bits"
    """

    max_depth: int = 8
    strict: bool = False
    max_errors: int = 100
    definitions_path: Optional[Path] = None
    output_format: str = "hex"

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            OCTASM_MAX_DEPTH: Sub-statement nesting limit (integer)
            OCTASM_STRICT: "1", "true" or "yes" to enable strict mode
            OCTASM_MAX_ERRORS: Error limit (integer)
            OCTASM_DEFINITIONS: Path to a definition file
            OCTASM_FORMAT: Output format ("hex" or "bits")

        Malformed values are ignored and the default is kept.
        """
        config = cls()

        if depth := os.environ.get("OCTASM_MAX_DEPTH"):
            try:
                config.max_depth = int(depth)
            except ValueError:
                pass

        if strict := os.environ.get("OCTASM_STRICT"):
            config.strict = strict.strip().lower() in ("1", "true", "yes", "on")

        if max_errors := os.environ.get("OCTASM_MAX_ERRORS"):
            try:
                config.max_errors = int(max_errors)
            except ValueError:
                pass

        if definitions := os.environ.get("OCTASM_DEFINITIONS"):
            config.definitions_path = Path(definitions)

        if output_format := os.environ.get("OCTASM_FORMAT"):
            if output_format.lower() in OUTPUT_FORMATS:
                config.output_format = output_format.lower()

        return config
