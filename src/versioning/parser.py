"""Token parsing utilities for package requests and framework versions."""

import re
from typing import Iterable, List, Optional, Tuple

import semantic_version

from constants import Constants
from .models import PackageRequest

# npm dist-tag names such as "next" or "rc"
_DIST_TAG_RE = re.compile(r"[A-Za-z][A-Za-z0-9._-]*")


def tokenize_rightmost_at(s: str) -> Tuple[str, Optional[str]]:
    """Return (name, spec or None) using the rightmost-``@`` rule.

    A leading ``@`` belongs to a scoped package name, so ``@angular/core``
    has no spec while ``@angular/core@17.0.0`` does.
    """
    s = s.strip()
    idx = s.rfind('@')
    if idx <= 0:
        return s, None
    name = s[:idx].strip()
    spec = s[idx + 1:].strip()
    return name, (spec or None)


def parse_package_token(token: str) -> PackageRequest:
    """Parse a ``name[@version]`` token into a PackageRequest.

    Missing specs and any casing of ``latest`` normalize to ``"latest"``.

    Raises:
        ValueError: If the token has no package name.
    """
    name, spec = tokenize_rightmost_at(token)
    if not name or name == '@':
        raise ValueError(f"Invalid package token: {token!r}")
    if spec is None or spec.lower() == Constants.LATEST:
        spec = Constants.LATEST
    return PackageRequest(name=name, requested_version=spec)


def parse_package_tokens(tokens: Iterable[str]) -> List[PackageRequest]:
    """Parse tokens in order, keeping the first occurrence of each name."""
    requests = []
    seen = set()
    for tok in tokens:
        if not tok or not tok.strip():
            continue
        req = parse_package_token(tok)
        if req.name not in seen:
            seen.add(req.name)
            requests.append(req)
    return requests


def is_valid_framework_version(value: str) -> bool:
    """True when ``value`` is a dist-tag (``latest``, ``next``) or an npm version or range."""
    if not value or not value.strip():
        return False
    if value.strip() == Constants.LATEST or _DIST_TAG_RE.fullmatch(value.strip()):
        return True
    try:
        semantic_version.NpmSpec(value.strip())
    except ValueError:
        return False
    return True
