"""Forward error correction: convolutional codes with Viterbi decoding and GF(2^8) arithmetic."""

__version__ = "0.1.0"

__all__ = [
    "bits",
    "convolutional",
    "error_buffer",
    "fec_shim",
    "field",
    "history_buffer",
    "lookup",
    "metric",
    "wide",
    "wide_lookup",
]