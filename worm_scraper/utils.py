import os
import re
from typing import Dict


def ensure_scheme(url: str) -> str:
    """Prefix bare ``host/path`` links with https so they can be requested."""
    url = url.strip()
    if url.startswith("//"):
        return "https:" + url
    if not url.startswith("http"):
        return "https://" + url
    return url


def clean_anchor_text(text: str) -> str:
    return text.strip().replace("\n", "")


def parse_style(style: str) -> Dict[str, str]:
    """Split an inline ``style`` attribute into lowercase property -> value pairs."""
    declarations: Dict[str, str] = {}
    if not style:
        return declarations
    for chunk in style.split(";"):
        if ":" not in chunk:
            continue
        prop, value = chunk.split(":", 1)
        prop = prop.strip().lower()
        if prop:
            declarations[prop] = re.sub(r"\s+", " ", value.strip().lower())
    return declarations


def output_exists(path: str) -> bool:
    return os.path.lexists(path)
