"""wasm-mini: parse, validate and instantiate WebAssembly modules."""

PROGRAM_NAME = "wasm-mini"
__version__ = "0.1.0"
