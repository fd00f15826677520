# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Decide which installed skills have upstream changes, and re-install them."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from skulls.core.exceptions import SkullsError, UpdateCheckError
from skulls.lock.store import LockStore
from skulls.models.lock import LockEntry
from skulls.models.results import AddResult, SkillUpdate, UpdateCheckReport, UpdateResult
from skulls.updates.github import GitHubTreeClient, skill_folder

logger = logging.getLogger("skulls.updates.oracle")

Reinstall = Callable[[str, SkillUpdate], Awaitable[AddResult]]


def _skip_reason(entry: LockEntry) -> str:
    if entry.source_type != "github":
        return f"{entry.source_type} sources cannot be checked"
    if not entry.skill_folder_hash:
        return "no stored fingerprint"
    return "no stored skill path"


async def _check_entry(
    name: str, entry: LockEntry, client: GitHubTreeClient
) -> tuple[str, SkillUpdate]:
    update = SkillUpdate(
        name=name,
        source=entry.source,
        skill_path=entry.skill_path or "",
        current_hash=entry.skill_folder_hash,
    )
    try:
        resolved = await client.resolve_skill_folder(entry.source, entry.skill_path or "")
    except UpdateCheckError as exc:
        logger.warning("Could not check %s: %s", name, exc, extra={"skill": name, "source": entry.source})
        return "error", update.model_copy(update={"reason": str(exc)})

    if resolved is None:
        return "error", update.model_copy(update={"reason": "Could not fetch from GitHub"})

    latest, branch = resolved
    update = update.model_copy(update={"latest_hash": latest, "branch": branch})
    if latest != entry.skill_folder_hash:
        return "update", update
    return "current", update


async def check_updates(store: LockStore, client: GitHubTreeClient) -> UpdateCheckReport:
    """Compare every checkable lock entry against its remote fingerprint.

    Entries are grouped by source so one tree listing serves every skill of
    a repository. A failed lookup lands in ``errors``; it never counts as an
    update or as up to date.
    """
    entries = store.all()
    report = UpdateCheckReport()
    checks = []
    for source, names in store.all_by_source().items():
        for name in names:
            entry = entries[name]
            if not entry.is_checkable:
                report.skipped.append(
                    SkillUpdate(name=name, source=source, reason=_skip_reason(entry))
                )
                continue
            checks.append(_check_entry(name, entry, client))

    for status, update in await asyncio.gather(*checks):
        if status == "update":
            report.updates.append(update)
        elif status == "current":
            report.up_to_date.append(update)
        else:
            report.errors.append(update)
    return report


def build_update_url(update: SkillUpdate) -> str:
    """Reconstruct a GitHub tree URL pointing at the skill's folder."""
    branch = update.branch or "main"
    source = update.source.removesuffix(".git").strip("/")
    url = f"https://github.com/{source}/tree/{branch}"
    folder = skill_folder(update.skill_path)
    return f"{url}/{folder}" if folder else url


async def apply_updates(updates: list[SkillUpdate], reinstall: Reinstall) -> list[UpdateResult]:
    """Re-install each updated skill in turn; one failure does not stop the rest."""
    results: list[UpdateResult] = []
    for update in updates:
        url = build_update_url(update)
        try:
            outcome = await reinstall(url, update)
        except SkullsError as exc:
            logger.warning(
                "Update of %s failed: %s", update.name, exc, extra={"skill": update.name, "source": update.source}
            )
            results.append(UpdateResult(name=update.name, success=False, error=str(exc)))
            continue

        if outcome.successful and not outcome.failed:
            results.append(UpdateResult(name=update.name, success=True))
        else:
            error = "; ".join(r.error or "install failed" for r in outcome.failed) or "nothing installed"
            results.append(UpdateResult(name=update.name, success=False, error=error))
    return results
