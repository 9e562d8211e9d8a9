"""
Install actions — how each catalog item is brought to "present".

Every action takes the ProvisionContext and either returns normally or
raises InstallError / InstallAborted. The Installer never calls an
action in dry-run mode or before its prerequisite gate has resolved.
"""

from __future__ import annotations

import logging

from macsetup.adapters.shell.filesystem import append_line, secure_ssh_dir
from macsetup.core.context import ProvisionContext
from macsetup.core.errors import InstallAborted, InstallError
from macsetup.core.models.item import InstallAction
from macsetup.core.services import probes

logger = logging.getLogger(__name__)

OH_MY_ZSH_URL = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"


# ── Generic builders ────────────────────────────────────────────


def brew_formula(*names: str) -> InstallAction:
    def action(ctx: ProvisionContext) -> None:
        ctx.brew.install(*names)

    return action


def brew_cask(cask: str) -> InstallAction:
    def action(ctx: ProvisionContext) -> None:
        ctx.brew.install(cask, cask=True)

    return action


def store_app(app_id: str) -> InstallAction:
    def action(ctx: ProvisionContext) -> None:
        ctx.mas.install(app_id)

    return action


# ── Item-specific actions ───────────────────────────────────────


def install_homebrew(ctx: ProvisionContext) -> None:
    """Run the official installer, then wire ``brew shellenv`` into the profile."""
    prefix = ctx.settings.paths.homebrew_prefix
    ctx.brew.install_self()
    append_line(ctx.settings.path(ctx.settings.paths.zprofile), ctx.brew.shellenv_line(prefix))
    ctx.runner.prepend_path(prefix / "bin")
    if not ctx.brew.version_ok():
        raise InstallError(f"brew is still not runnable from {prefix}/bin")


def install_oh_my_zsh(ctx: ProvisionContext) -> None:
    script = f'sh -c "$(curl -fsSL {OH_MY_ZSH_URL})" "" --unattended'
    ctx.runner.check(["sh", "-c", script], capture=False)


def install_nvm(ctx: ProvisionContext) -> None:
    """brew install nvm, create NVM_DIR, and source it from ``~/.zshrc``."""
    ctx.brew.install("nvm")

    nvm_dir = ctx.settings.path(ctx.settings.paths.nvm_dir)
    try:
        nvm_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallError(f"Cannot create {nvm_dir}: {e}") from e

    opt = ctx.settings.paths.homebrew_prefix / "opt" / "nvm"
    zshrc = ctx.settings.path(ctx.settings.paths.zshrc)
    for line in (
        f'export NVM_DIR="{nvm_dir}"',
        f'[ -s "{opt}/nvm.sh" ] && \\. "{opt}/nvm.sh"',
        f'[ -s "{opt}/etc/bash_completion.d/nvm" ] && \\. "{opt}/etc/bash_completion.d/nvm"',
    ):
        append_line(zshrc, line)


def install_node(ctx: ProvisionContext) -> None:
    """nvm is a shell function, so it has to be sourced in the same shell."""
    nvm_dir = ctx.settings.path(ctx.settings.paths.nvm_dir)
    nvm_sh = ctx.settings.paths.homebrew_prefix / "opt" / "nvm" / "nvm.sh"
    script = (
        f'export NVM_DIR="{nvm_dir}"; . "{nvm_sh}" '
        "&& nvm install --lts && nvm use --lts"
    )
    ctx.runner.check(["bash", "-c", script], capture=False)


def configure_git(ctx: ProvisionContext) -> None:
    """Set the global identity; ask for any value the settings leave empty."""
    identity = ctx.settings.git
    name = identity.user_name or ctx.prompts.text(
        "Git user.name", default=ctx.git.get("user.name") or ""
    )
    email = identity.user_email or ctx.prompts.text(
        "Git user.email", default=ctx.git.get("user.email") or ""
    )
    if not name or not email:
        raise InstallAborted("Git user.name and user.email are both required")

    ctx.git.set("user.name", name)
    ctx.git.set("user.email", email)
    ctx.git.set("color.ui", identity.color_ui)


def transfer_ssh_keys(ctx: ProvisionContext) -> None:
    """Walk the user through copying keys from another machine, then verify."""
    ctx.ui.instructions(
        "Secure SSH Key Transfer Instructions",
        [
            ("On your source machine, package your SSH keys:",
             ["tar czf - ~/.ssh | base64 > ssh_backup.txt"]),
            ("On this machine, create a file and paste the contents:",
             ["nano ~/ssh_restore.txt"]),
            ("Restore the SSH keys:",
             ["base64 -d ~/ssh_restore.txt | tar xzf - -C ~"]),
            ("Set proper permissions:",
             ["chmod 700 ~/.ssh", "chmod 600 ~/.ssh/id_*", "chmod 644 ~/.ssh/*.pub"]),
            ("Clean up:",
             ["rm ~/ssh_restore.txt"]),
        ],
    )

    if not ctx.prompts.confirm("Have you completed these steps?", default=False):
        raise InstallAborted("SSH key transfer was not confirmed")

    secure_ssh_dir(ctx.settings.path(ctx.settings.paths.ssh_dir))

    if not probes.ssh_keys_present()(ctx):
        raise InstallAborted("SSH keys were not properly installed. Please try again.")


def fix_node_modules_permissions(ctx: ProvisionContext) -> None:
    target = ctx.settings.paths.node_modules_dir
    ctx.runner.check(["sudo", "chown", "-R", ctx.settings.user, str(target)], capture=False)
