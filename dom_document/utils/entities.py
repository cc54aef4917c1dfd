"""
Numeric character reference encoding for the HTML 4 Latin-1, symbol and
special entity sets.
"""

import re
from typing import List, Tuple

# Inclusive code point ranges of the HTMLlat1, HTMLsymbol and HTMLspecial
# entity sets. 34, 38, 60 and 62 are left alone so markup stays intact.
ENTITY_RANGES: List[Tuple[int, int]] = [
    # HTMLlat1
    (160, 255),
    # HTMLsymbol
    (402, 402), (913, 929), (931, 937), (945, 969), (977, 978), (982, 982),
    (8226, 8226), (8230, 8230), (8242, 8243), (8254, 8254), (8260, 8260),
    (8465, 8465), (8472, 8472), (8476, 8476), (8482, 8482), (8501, 8501),
    (8592, 8596), (8629, 8629), (8656, 8660), (8704, 8704), (8706, 8707),
    (8709, 8709), (8711, 8713), (8715, 8715), (8719, 8719), (8721, 8722),
    (8727, 8727), (8730, 8730), (8733, 8734), (8736, 8736), (8743, 8747),
    (8756, 8756), (8764, 8764), (8773, 8773), (8776, 8776), (8800, 8801),
    (8804, 8805), (8834, 8836), (8838, 8839), (8853, 8853), (8855, 8855),
    (8869, 8869), (8901, 8901), (8968, 8971), (9001, 9002), (9674, 9674),
    (9824, 9824), (9827, 9827), (9829, 9830),
    # HTMLspecial
    (338, 339), (352, 353), (376, 376), (710, 710), (732, 732), (8194, 8195),
    (8201, 8201), (8204, 8207), (8211, 8212), (8216, 8218), (8220, 8222),
    (8224, 8225), (8240, 8240), (8249, 8250), (8364, 8364),
]


def _build_pattern() -> 're.Pattern':
    parts = []
    for start, end in ENTITY_RANGES:
        if start == end:
            parts.append(re.escape(chr(start)))
        else:
            parts.append(f"{re.escape(chr(start))}-{re.escape(chr(end))}")
    return re.compile(f"[{''.join(parts)}]")


_ENTITY_PATTERN = _build_pattern()


def convert_utf8_to_html_entities(html: str) -> str:
    """
    Replace characters from the HTML entity sets with numeric references.

    Args:
        html: A HTML string

    Returns:
        str: The string with e.g. "é" replaced by "&#233;"
    """
    return _ENTITY_PATTERN.sub(lambda match: f"&#{ord(match.group(0))};", html)
