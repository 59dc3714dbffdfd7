# src/pow2shift/utility.py
from __future__ import annotations

import os


class UserInputError(Exception):
    pass


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(n)
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2))
    bl = n.bit_length()
    est = int((bl * 30103) // 100000)
    # bring into correct decade with at most a couple of steps
    p10 = 10 ** est
    if n < p10:
        while n < p10:
            est -= 1
            p10 //= 10
    else:
        p10 *= 10
        while n >= p10:
            est += 1
            p10 *= 10
    return est + 1


def validate_output_setting(output_file: str | None) -> str | None:
    """
    Validate an output path.
    - None / "" => ok (stdout)
    - path/to/file => must name a file, not a directory or a device
    Returns the (possibly normalized) output_file, or raises ValueError.
    """
    FORBIDDEN_FILENAMES = {
        # Windows reserved device names (case-insensitive on Windows)
        "con", "prn", "aux", "nul",
        "com1", "com2", "com3", "com4", "com5", "com6", "com7", "com8", "com9",
        "lpt1", "lpt2", "lpt3", "lpt4", "lpt5", "lpt6", "lpt7", "lpt8", "lpt9",
    }

    if not output_file:
        return None

    if output_file.endswith(("/", os.sep)) or os.path.isdir(output_file):
        raise ValueError(f"Output path is a directory: {output_file}")

    basename = os.path.basename(output_file)
    name_no_ext, _ = os.path.splitext(basename)
    if basename.lower() in FORBIDDEN_FILENAMES or name_no_ext.lower() in FORBIDDEN_FILENAMES:
        raise ValueError(f"Forbidden output filename: {basename}")

    return os.path.normpath(os.path.expanduser(output_file))


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
