"""
Detection signals — side-effect-free presence checks.

Each builder returns a named Signal. Signals read the machine through
the context's adapters and settings only, so they can be evaluated any
number of times (before the selection menu and again right before an
install) without changing anything.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from macsetup.adapters.shell.filesystem import has_entries, owner_of, ssh_private_keys
from macsetup.core.context import ProvisionContext
from macsetup.core.errors import ProbeFailure
from macsetup.core.models.item import Signal
from macsetup.core.models.settings import Settings


def command_succeeds(*argv: str) -> Signal:
    return Signal(" ".join(argv), lambda ctx: ctx.runner.succeeds(list(argv)))


def on_path(binary: str) -> Signal:
    return Signal(f"which:{binary}", lambda ctx: ctx.runner.succeeds(["which", binary]))


def brew_formula(formula: str) -> Signal:
    return Signal(f"brew:{formula}", lambda ctx: ctx.brew.has_formula(formula))


def brew_cask(cask: str) -> Signal:
    return Signal(f"cask:{cask}", lambda ctx: ctx.brew.has_cask(cask))


def app_bundle(app_name: str) -> Signal:
    """``<applications_dir>/<app_name>.app`` exists."""

    def check(ctx: ProvisionContext) -> bool:
        return (ctx.settings.paths.applications_dir / f"{app_name}.app").is_dir()

    return Signal(f"app:{app_name}", check)


def spotlight_bundle(bundle_id: str) -> Signal:
    return Signal(f"bundle:{bundle_id}", lambda ctx: ctx.spotlight.has_bundle(bundle_id))


def store_app(app_id: str) -> Signal:
    return Signal(f"mas:{app_id}", lambda ctx: ctx.mas.has_app(app_id))


def store_signed_in() -> Signal:
    return Signal("mas:account", lambda ctx: ctx.mas.signed_in())


def directory_exists(label: str, path: Callable[[Settings], Path | str]) -> Signal:
    return Signal(f"dir:{label}", lambda ctx: ctx.settings.path(path(ctx.settings)).is_dir())


def directory_populated(label: str, path: Callable[[Settings], Path | str]) -> Signal:
    return Signal(f"dir+:{label}", lambda ctx: has_entries(ctx.settings.path(path(ctx.settings))))


def ssh_keys_present() -> Signal:
    def check(ctx: ProvisionContext) -> bool:
        return bool(ssh_private_keys(ctx.settings.path(ctx.settings.paths.ssh_dir)))

    return Signal("ssh:keys", check)


def git_config(key: str, expected: Callable[[Settings], str]) -> Signal:
    """Global ``key`` equals the configured value (or is merely set, if none)."""

    def check(ctx: ProvisionContext) -> bool:
        value = ctx.git.get(key)
        if not value:
            return False
        want = expected(ctx.settings)
        return value == want if want else True

    return Signal(f"git:{key}", check)


def owned_by_user(label: str, path: Callable[[Settings], Path | str]) -> Signal:
    """Path from settings is owned by ``settings.user``."""

    def check(ctx: ProvisionContext) -> bool:
        target = ctx.settings.path(path(ctx.settings))
        owner = owner_of(target)
        if owner is None:
            raise ProbeFailure(f"Cannot stat {target}")
        return owner == ctx.settings.user

    return Signal(f"owner:{label}", check)
