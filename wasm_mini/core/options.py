"""Options dataclasses for command configuration."""

from dataclasses import dataclass


@dataclass
class RunOptions:
    """Configuration for one pipeline invocation."""

    # Print [VERBOSE] diagnostics while the pipeline runs
    verbose: bool = False

    # Warn when the input path lacks a .wasm extension
    warn_extension: bool = True
