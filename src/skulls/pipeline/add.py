# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""The ``add`` flow: parse, fetch, discover, select, install, record.

Each selected skill is installed and recorded in the lock store before the
next one starts. A failed install is reported and does not stop the rest;
a failed lock write is logged and never undoes an install.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

import httpx
from pydantic import BaseModel, Field

from skulls.core.constants import SKILL_MANIFEST, SourceKind, SourceType
from skulls.core.exceptions import (
    DiscoveryEmptyError,
    FetchError,
    LockWriteError,
    OperationCancelled,
    SkullsError,
    SourceNotFoundError,
    UpdateCheckError,
)
from skulls.discovery.skills import discover_skills, get_skill_display_name
from skulls.install.git import cloned_repository
from skulls.install.installer import (
    install_remote_skill,
    install_skill,
    install_well_known_skill,
    is_skill_installed,
)
from skulls.install.paths import sanitize_name
from skulls.lock.store import LockStore
from skulls.models.lock import LockEntry
from skulls.models.results import AddResult, InstallResult
from skulls.models.skill import RemoteSkill, Skill, WellKnownSkill
from skulls.models.source import SourceDescriptor
from skulls.parsers.source_parser import get_owner_repo, parse_source
from skulls.pipeline.selection import Chooser, select_skills
from skulls.providers import ProviderRegistry, default_registry, direct_provider
from skulls.providers import wellknown
from skulls.updates.github import GitHubTreeClient

logger = logging.getLogger("skulls.pipeline.add")

Confirm = Callable[[list[str], list[str]], bool]

NO_SKILLS_MESSAGE = "No valid skills found. Skills require a SKILL.md with name and description."


class AddOptions(BaseModel):
    """Flags of one ``add`` invocation."""

    target_dir: Path
    skills: list[str] = Field(default_factory=list)
    list_only: bool = False
    yes: bool = False
    full_depth: bool = False
    include_internal: bool = False


@dataclass
class _InstallPlan:
    name: str
    install: Callable[[], Awaitable[Path]]
    lock_entry: Callable[[], Awaitable[LockEntry]]


def _merge_filters(options: AddOptions, desc: SourceDescriptor) -> list[str]:
    filters = list(options.skills)
    if desc.skill_filter and desc.skill_filter not in filters:
        filters.append(desc.skill_filter)
    return filters


def _already_installed(name: str, target_dir: Path) -> bool:
    try:
        return is_skill_installed(name, target_dir)
    except SkullsError:
        return False


async def _record(store: LockStore, plan: _InstallPlan) -> None:
    try:
        entry = await plan.lock_entry()
        store.add(plan.name, entry)
    except LockWriteError as exc:
        logger.warning(
            "Installed %s but could not update the lock file: %s",
            plan.name,
            exc,
            extra={"skill": plan.name},
        )


async def _install_all(
    plans: list[_InstallPlan],
    options: AddOptions,
    store: LockStore,
    confirm: Confirm | None,
    source: str,
) -> list[InstallResult]:
    overwrites = await asyncio.gather(
        *(asyncio.to_thread(_already_installed, p.name, options.target_dir) for p in plans)
    )
    overwritten = [p.name for p, exists in zip(plans, overwrites, strict=True) if exists]
    for name in overwritten:
        logger.info("%s overwrites existing skill", name, extra={"skill": name, "source": source})

    if confirm is not None and not options.yes:
        if not confirm([p.name for p in plans], overwritten):
            raise OperationCancelled("Installation cancelled")

    results: list[InstallResult] = []
    for plan, exists in zip(plans, overwrites, strict=True):
        try:
            path = await plan.install()
        except (SkullsError, OSError) as exc:
            logger.warning(
                "Failed to install %s: %s", plan.name, exc, extra={"skill": plan.name, "source": source}
            )
            results.append(
                InstallResult(skill=plan.name, success=False, error=str(exc), overwrote=exists)
            )
            continue
        results.append(InstallResult(skill=plan.name, success=True, path=str(path), overwrote=exists))
        await _record(store, plan)
    return results


def _relative_skill_path(skill: Skill, root: Path) -> str | None:
    try:
        rel = Path(skill.path).resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return None
    return SKILL_MANIFEST if rel == "." else f"{rel}/{SKILL_MANIFEST}"


async def _github_hash(
    tree_client: GitHubTreeClient | None, owner_repo: str, skill_path: str | None
) -> str:
    if tree_client is None or not skill_path:
        return ""
    try:
        return await tree_client.fetch_skill_folder_hash(owner_repo, skill_path) or ""
    except UpdateCheckError as exc:
        logger.warning("Could not fingerprint %s/%s: %s", owner_repo, skill_path, exc)
        return ""


def _directory_plan(
    skill: Skill,
    desc: SourceDescriptor,
    root: Path,
    options: AddOptions,
    tree_client: GitHubTreeClient | None,
) -> _InstallPlan:
    skill_path = _relative_skill_path(skill, root)
    source = get_owner_repo(desc) or desc.location

    async def lock_entry() -> LockEntry:
        folder_hash = ""
        if desc.kind == SourceKind.GITHUB:
            folder_hash = await _github_hash(tree_client, source, skill_path)
        return LockEntry(
            source=source,
            source_type=str(desc.kind),
            source_url=desc.url or desc.local_path or "",
            skill_path=skill_path,
            skill_folder_hash=folder_hash,
        )

    return _InstallPlan(
        name=sanitize_name(skill.name),
        install=lambda: install_skill(skill, options.target_dir),
        lock_entry=lock_entry,
    )


async def _add_from_directory(
    desc: SourceDescriptor,
    root: Path,
    filters: list[str],
    options: AddOptions,
    store: LockStore,
    tree_client: GitHubTreeClient | None,
    choose: Chooser | None,
    confirm: Confirm | None,
) -> AddResult:
    skills = discover_skills(
        root,
        desc.subpath,
        include_internal=options.include_internal or bool(filters),
        full_depth=options.full_depth,
    )
    if not skills:
        raise DiscoveryEmptyError(NO_SKILLS_MESSAGE)

    result = AddResult(
        source=desc.location,
        discovered={get_skill_display_name(s): s.description for s in skills},
    )
    if options.list_only:
        result.listed_only = True
        return result

    selected = select_skills(skills, filters, yes=options.yes, choose=choose)
    plans = [_directory_plan(s, desc, root, options, tree_client) for s in selected]
    result.results = await _install_all(plans, options, store, confirm, desc.location)
    return result


async def _add_remote(
    desc: SourceDescriptor,
    filters: list[str],
    options: AddOptions,
    store: LockStore,
    registry: ProviderRegistry,
    http_client: httpx.AsyncClient,
    confirm: Confirm | None,
) -> AddResult:
    provider = registry.find_provider(desc.url) or direct_provider
    logger.info("Fetching %s via %s", desc.url, provider.display_name)
    remote = await provider.fetch_skill(http_client, desc.url)
    if remote is None:
        raise FetchError(
            f"Could not fetch a valid skill from {desc.url}: "
            "the document is missing or lacks required frontmatter (name, description)."
        )

    result = AddResult(source=desc.url, discovered={remote.name: remote.description})
    if options.list_only:
        result.listed_only = True
        return result

    selected: list[RemoteSkill] = select_skills([remote], filters, yes=True)

    def plan_for(skill: RemoteSkill) -> _InstallPlan:
        async def lock_entry() -> LockEntry:
            return LockEntry(
                source=skill.source_identifier,
                source_type=str(skill.provider_id),
                source_url=desc.url,
                skill_folder_hash="",
            )

        return _InstallPlan(
            name=skill.install_name,
            install=lambda: install_remote_skill(skill, options.target_dir),
            lock_entry=lock_entry,
        )

    result.results = await _install_all(
        [plan_for(s) for s in selected], options, store, confirm, desc.url
    )
    return result


async def _add_well_known(
    desc: SourceDescriptor,
    filters: list[str],
    options: AddOptions,
    store: LockStore,
    http_client: httpx.AsyncClient,
    choose: Chooser | None,
    confirm: Confirm | None,
) -> AddResult:
    include_internal = options.include_internal or bool(filters)
    skills = [
        s
        for s in await wellknown.fetch_all_skills(http_client, desc.url)
        if include_internal or s.metadata.get("internal") is not True
    ]
    if not skills:
        raise DiscoveryEmptyError(
            f"No skills found at {desc.url}. "
            "Make sure the server has a /.well-known/skills/index.json file."
        )

    result = AddResult(source=desc.url, discovered={s.name: s.description for s in skills})
    if options.list_only:
        result.listed_only = True
        return result

    source_identifier = wellknown.get_source_identifier(desc.url)
    selected = select_skills(skills, filters, yes=options.yes, choose=choose)

    def plan_for(skill: WellKnownSkill) -> _InstallPlan:
        async def lock_entry() -> LockEntry:
            return LockEntry(
                source=source_identifier,
                source_type=str(SourceType.WELL_KNOWN),
                source_url=skill.source_url,
                skill_folder_hash="",
            )

        return _InstallPlan(
            name=skill.install_name,
            install=lambda: install_well_known_skill(skill, options.target_dir),
            lock_entry=lock_entry,
        )

    result.results = await _install_all(
        [plan_for(s) for s in selected], options, store, confirm, desc.url
    )
    return result


async def run_add(
    source: str,
    options: AddOptions,
    *,
    store: LockStore,
    http_client: httpx.AsyncClient,
    registry: ProviderRegistry | None = None,
    tree_client: GitHubTreeClient | None = None,
    choose: Chooser | None = None,
    confirm: Confirm | None = None,
) -> AddResult:
    """Install skills from *source* into ``options.target_dir``.

    Parameters
    ----------
    source:
        Raw source string (path, shorthand, or URL).
    options:
        Selection and install flags.
    store:
        Lock store receiving one entry per successful install.
    http_client:
        Client used for provider and well-known fetches.
    registry:
        Host providers; defaults to the built-in set.
    tree_client:
        GitHub tree client used to fingerprint GitHub installs.
    choose:
        Interactive multi-select, used only when nothing else decides.
    confirm:
        Called with the selected names and those that already exist;
        returning False cancels the run.

    Raises
    ------
    ParseError, FetchError, DiscoveryEmptyError, PathSafetyError,
    NoMatchingSkillsError, SelectionRequiredError, OperationCancelled
        For fatal outcomes. Per-skill install failures are reported in the
        returned ``AddResult`` instead.
    """
    registry = registry or default_registry()
    desc = parse_source(source, matches_provider=registry.matches)
    filters = _merge_filters(options, desc)
    logger.info("Resolved %s as %s", source, desc.kind, extra={"source": source})

    if desc.kind == SourceKind.DIRECT_URL:
        return await _add_remote(desc, filters, options, store, registry, http_client, confirm)
    if desc.kind == SourceKind.WELL_KNOWN:
        return await _add_well_known(desc, filters, options, store, http_client, choose, confirm)

    if desc.is_local:
        root = Path(desc.local_path or "")
        if not root.exists():
            raise SourceNotFoundError(f"Local path does not exist: {root}")
        return await _add_from_directory(
            desc, root, filters, options, store, tree_client, choose, confirm
        )

    async with cloned_repository(desc.url, desc.ref) as repo:
        return await _add_from_directory(
            desc, repo, filters, options, store, tree_client, choose, confirm
        )
