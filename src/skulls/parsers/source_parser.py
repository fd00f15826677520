# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Classify user-supplied source strings into SourceDescriptor objects.

Supported shapes, tried in order:

* local paths (absolute, ``./``, ``../``, ``~``, Windows drive letters)
* ``git@host:owner/repo.git`` SSH remotes and ``ssh://`` / ``git://`` URLs
* ``https://github.com/owner/repo[/tree|blob/<ref>/<path>]``
* ``https://gitlab.com/group/repo[/-/tree|blob/<ref>/<path>]``
* URLs claimed by a registered host provider, or ending in ``.md``
* well-known discovery endpoints
* ``.git`` remotes on any other host
* ``[github:|gitlab:]owner/repo[@ref|#ref][/subpath][@skill]`` shorthand

Parsing never touches the network.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

from skulls.core.constants import SKILL_MANIFEST, WELL_KNOWN_PATH, SourceKind
from skulls.core.exceptions import ParseError
from skulls.models.source import SourceDescriptor

logger = logging.getLogger("skulls.parsers.source_parser")

_WINDOWS_DRIVE_RE = re.compile(r"^[A-Za-z]:[\\/]")
_SSH_RE = re.compile(r"^git@(?P<host>[^:]+):(?P<path>.+?)(?:\.git)?/?$")
_SHORTHAND_RE = re.compile(
    r"^(?:(?P<host>github|gitlab):)?"
    r"(?P<owner>[A-Za-z0-9_][A-Za-z0-9_.-]*)/(?P<repo>[A-Za-z0-9_.-]+?)(?:\.git)?"
    r"(?P<rest>[@#/].*)?$"
)
_SKILL_SUFFIX_RE = re.compile(r"@(?P<skill>[^@/#]+)$")

_HOSTS = {
    "github.com": SourceKind.GITHUB,
    "gitlab.com": SourceKind.GITLAB,
}


def _is_local_path(raw: str) -> bool:
    return (
        os.path.isabs(raw)
        or raw.startswith(("./", "../", "~", ".\\", "..\\"))
        or raw in (".", "..")
        or bool(_WINDOWS_DRIVE_RE.match(raw))
    )


def _clean_subpath(parts: list[str]) -> str | None:
    cleaned = "/".join(p for p in parts if p)
    return cleaned or None


def _repo_url(host: str, repo_path: str) -> str:
    return f"https://{host}/{repo_path}.git"


def _local(raw: str) -> SourceDescriptor:
    resolved = Path(raw).expanduser().resolve()
    return SourceDescriptor(kind=SourceKind.LOCAL, local_path=str(resolved))


def _parse_ssh(raw: str) -> SourceDescriptor:
    match = _SSH_RE.match(raw)
    if not match:
        raise ParseError(f"Unrecognized git remote: {raw}")
    kind = _HOSTS.get(match.group("host").lower(), SourceKind.GENERIC_GIT)
    return SourceDescriptor(kind=kind, url=raw)


def _split_tree_path(segments: list[str]) -> tuple[str | None, str | None]:
    """Decompose ``tree|blob/<ref>/<path...>`` into ref and subpath."""
    if len(segments) < 2 or segments[0] not in ("tree", "blob"):
        return None, None
    mode, ref, rest = segments[0], segments[1], segments[2:]
    # A blob link points at a file; scope discovery to its directory.
    if mode == "blob" and rest:
        rest = rest[:-1]
    elif rest and rest[-1] == SKILL_MANIFEST:
        rest = rest[:-1]
    return ref or None, _clean_subpath(rest)


def _parse_github_url(path: str) -> SourceDescriptor | None:
    segments = [s for s in path.split("/") if s]
    if len(segments) < 2:
        return None
    owner, repo = segments[0], segments[1].removesuffix(".git")
    ref, subpath = _split_tree_path(segments[2:])
    return SourceDescriptor(
        kind=SourceKind.GITHUB,
        url=_repo_url("github.com", f"{owner}/{repo}"),
        ref=ref,
        subpath=subpath,
    )


def _parse_gitlab_url(path: str) -> SourceDescriptor | None:
    repo_part, sep, tree_part = path.partition("/-/")
    repo_path = repo_part.strip("/").removesuffix(".git")
    if repo_path.count("/") < 1:
        return None
    ref, subpath = (None, None)
    if sep:
        ref, subpath = _split_tree_path([s for s in tree_part.split("/") if s])
    return SourceDescriptor(
        kind=SourceKind.GITLAB,
        url=_repo_url("gitlab.com", repo_path),
        ref=ref,
        subpath=subpath,
    )


def _parse_http(raw: str, matches_provider: Callable[[str], bool] | None) -> SourceDescriptor:
    parts = urlsplit(raw)
    host = parts.netloc.lower().removeprefix("www.")
    path = parts.path

    if host == "github.com":
        desc = _parse_github_url(path)
        if desc is not None:
            return desc
    elif host == "gitlab.com":
        desc = _parse_gitlab_url(path)
        if desc is not None:
            return desc

    if matches_provider is not None and matches_provider(raw):
        return SourceDescriptor(kind=SourceKind.DIRECT_URL, url=raw)
    if path.lower().endswith(".md"):
        return SourceDescriptor(kind=SourceKind.DIRECT_URL, url=raw)
    if f"/{WELL_KNOWN_PATH}" in path:
        return SourceDescriptor(kind=SourceKind.WELL_KNOWN, url=raw)
    if path.endswith(".git"):
        return SourceDescriptor(kind=SourceKind.GENERIC_GIT, url=raw)
    # Any other site may publish a discovery index under its origin.
    return SourceDescriptor(kind=SourceKind.WELL_KNOWN, url=raw)


def _parse_shorthand(raw: str) -> SourceDescriptor | None:
    match = _SHORTHAND_RE.match(raw)
    if not match:
        return None

    kind = SourceKind.GITLAB if match.group("host") == "gitlab" else SourceKind.GITHUB
    rest = match.group("rest") or ""

    skill_filter: str | None = None
    suffix = _SKILL_SUFFIX_RE.search(rest)
    if suffix:
        skill_filter = suffix.group("skill")
        rest = rest[: suffix.start()]

    ref: str | None = None
    if rest.startswith(("@", "#")):
        ref, _, sub = rest[1:].partition("/")
        if not ref:
            raise ParseError(f"Empty ref in source: {raw}")
        rest = f"/{sub}" if sub else ""

    if rest and not rest.startswith("/"):
        raise ParseError(f"Unrecognized source: {raw}")
    subpath = _clean_subpath(rest.split("/"))

    host = "gitlab.com" if kind == SourceKind.GITLAB else "github.com"
    return SourceDescriptor(
        kind=kind,
        url=_repo_url(host, f"{match.group('owner')}/{match.group('repo')}"),
        ref=ref,
        subpath=subpath,
        skill_filter=skill_filter,
    )


def parse_source(
    raw: str,
    *,
    matches_provider: Callable[[str], bool] | None = None,
) -> SourceDescriptor:
    """Parse a raw source string.

    Parameters
    ----------
    raw:
        The string the user typed.
    matches_provider:
        Predicate reporting whether a registered host provider recognizes a
        URL. Matching URLs are classified ``direct-url``.

    Raises
    ------
    ParseError
        If the string matches none of the supported shapes.
    """
    raw = raw.strip()
    if not raw:
        raise ParseError("Source is empty")

    if _is_local_path(raw):
        return _local(raw)

    if raw.startswith("git@"):
        return _parse_ssh(raw)
    if raw.startswith(("ssh://", "git://", "git+ssh://")):
        return SourceDescriptor(kind=SourceKind.GENERIC_GIT, url=raw)
    if raw.startswith(("http://", "https://")):
        return _parse_http(raw, matches_provider)

    desc = _parse_shorthand(raw)
    if desc is not None:
        return desc

    if Path(raw).exists():
        return _local(raw)

    raise ParseError(
        f"Unrecognized source: {raw!r}. Use owner/repo, a git or https URL, or a local path."
    )


def _repo_path_from_url(url: str) -> str | None:
    ssh = _SSH_RE.match(url)
    if ssh:
        return ssh.group("path")
    path = urlsplit(url).path.strip("/")
    return path.removesuffix(".git") or None


def get_owner_repo(desc: SourceDescriptor) -> str | None:
    """Return the normalized source identifier stored in lock entries.

    ``owner/repo`` for GitHub and GitLab, the URL without ``.git`` for other
    git hosts, and the absolute path for local sources. Provider and
    well-known sources have their own identifiers and return ``None``.
    """
    if desc.kind == SourceKind.LOCAL:
        return desc.local_path
    if desc.kind in (SourceKind.GITHUB, SourceKind.GITLAB):
        return _repo_path_from_url(desc.url)
    if desc.kind == SourceKind.GENERIC_GIT:
        return desc.url.removesuffix("/").removesuffix(".git")
    return None


def format_source(desc: SourceDescriptor) -> str:
    """Render a descriptor back into a string that re-parses to it."""
    if desc.kind == SourceKind.LOCAL:
        return desc.local_path or ""
    if desc.kind not in (SourceKind.GITHUB, SourceKind.GITLAB) or desc.url.startswith("git@"):
        return desc.url

    repo_path = _repo_path_from_url(desc.url) or ""
    if desc.kind == SourceKind.GITLAB and repo_path.count("/") > 1:
        # Nested groups only round-trip through the URL form.
        url = f"https://gitlab.com/{repo_path}"
        if desc.ref:
            url += f"/-/tree/{desc.ref}"
            if desc.subpath:
                url += f"/{desc.subpath}"
        return url

    text = f"gitlab:{repo_path}" if desc.kind == SourceKind.GITLAB else repo_path
    if desc.ref:
        text += f"@{desc.ref}" if desc.subpath or desc.skill_filter else f"#{desc.ref}"
    if desc.subpath:
        text += f"/{PurePosixPath(desc.subpath).as_posix()}"
    if desc.skill_filter:
        text += f"@{desc.skill_filter}"
    return text
