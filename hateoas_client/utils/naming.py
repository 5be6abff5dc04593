from __future__ import annotations

import keyword
import re

_UNSAFE_CHARS = re.compile(r"[^0-9A-Za-z_]")
_LEADING_UNDERSCORES = re.compile(r"^_{2,}")


def accessor_name(name: str) -> str:
    """
    Turn an action name into a Python attribute name.

    "create-product-test" -> "create_product_test", "2fa" -> "_2fa",
    "import" -> "import_", "__private" -> "_private".
    """
    safe = _UNSAFE_CHARS.sub("_", name)
    # Node attribute lookup ignores names starting with "__"
    safe = _LEADING_UNDERSCORES.sub("_", safe)
    if safe[:1].isdigit():
        safe = f"_{safe}"
    if keyword.iskeyword(safe):
        safe = f"{safe}_"
    return safe
