"""
Default item catalog — the fixed provisioning checklist.

Order matters only for display: the report and the status scan walk
items in the order listed here. ``depends_on`` is the one structural
relationship between items; everything else is independent.
"""

from __future__ import annotations

from macsetup.core.models.item import Catalog, Category, Item, all_of, any_of
from macsetup.core.services import actions
from macsetup.core.services import probes as p

PACKAGE_MANAGER_KEY = "brew"
CREDENTIALS_KEY = "sshKeys"
STORE_KEY = "mas"

STORE_SIGN_IN_STEPS = (
    "Open the App Store app",
    "Choose Store → Sign In and sign in with your Apple ID",
    "Come back here and confirm",
)


def _gui_app(key: str, name: str, category: Category, cask: str, app: str, bundle_id: str) -> Item:
    """A cask app found by brew, by its .app bundle, or by Spotlight."""
    return Item(
        key=key,
        name=name,
        category=category,
        detect=any_of(p.brew_cask(cask), p.app_bundle(app), p.spotlight_bundle(bundle_id)),
        install=actions.brew_cask(cask),
    )


def _store_app(key: str, name: str, category: Category, app_id: str) -> Item:
    return Item(
        key=key,
        name=name,
        category=category,
        detect=p.store_app(app_id),
        install=actions.store_app(app_id),
        depends_on=STORE_KEY,
    )


def build_catalog() -> Catalog:
    """Construct the default catalog. Called once per process."""
    dev = Category.DEVELOPMENT
    util = Category.UTILITIES
    prod = Category.PRODUCTIVITY
    conf = Category.CONFIGURATION

    return Catalog([
        Item(
            key=PACKAGE_MANAGER_KEY,
            name="Homebrew",
            category=dev,
            detect=p.command_succeeds("brew", "--version"),
            install=actions.install_homebrew,
        ),
        Item(
            key=STORE_KEY,
            name="Mac App Store CLI",
            category=dev,
            detect=p.brew_formula("mas"),
            install=actions.brew_formula("mas"),
            auth=p.store_signed_in(),
            auth_instructions=STORE_SIGN_IN_STEPS,
        ),
        Item(
            key="ohmyzsh",
            name="Oh My Zsh",
            category=dev,
            detect=p.directory_populated("oh-my-zsh", lambda s: s.paths.oh_my_zsh_dir),
            install=actions.install_oh_my_zsh,
        ),
        Item(
            key="nvm",
            name="Node Version Manager",
            category=dev,
            # brew-managed with its dir, or a working dir that already yields node
            detect=any_of(
                all_of(p.brew_formula("nvm"), p.directory_exists("nvm", lambda s: s.paths.nvm_dir)),
                all_of(p.directory_exists("nvm", lambda s: s.paths.nvm_dir), p.on_path("node")),
                name="nvm",
            ),
            install=actions.install_nvm,
        ),
        Item(
            key="node",
            name="Node.js (LTS)",
            category=dev,
            detect=p.command_succeeds("node", "--version"),
            install=actions.install_node,
            depends_on="nvm",
        ),
        _gui_app("vscode", "Visual Studio Code", dev,
                 "visual-studio-code", "Visual Studio Code", "com.microsoft.VSCode"),
        _gui_app("chrome", "Google Chrome", util,
                 "google-chrome", "Google Chrome", "com.google.Chrome"),
        Item(
            key="spectacle",
            name="Spectacle",
            category=util,
            detect=p.brew_cask("spectacle"),
            install=actions.brew_cask("spectacle"),
        ),
        Item(
            key="obsidian",
            name="Obsidian",
            category=prod,
            detect=p.spotlight_bundle("md.obsidian"),
            install=actions.brew_cask("obsidian"),
        ),
        Item(
            key="shottr",
            name="Shottr",
            category=util,
            detect=p.brew_cask("shottr"),
            install=actions.brew_cask("shottr"),
        ),
        Item(
            key="hovrly",
            name="Hovrly",
            category=util,
            detect=p.brew_formula("hovrly"),
            install=actions.brew_formula("hovrly"),
        ),
        _store_app("amphetamine", "Amphetamine", util, "937984704"),
        _store_app("slack", "Slack", prod, "803453959"),
        _store_app("xcode", "Xcode", dev, "497799835"),
        Item(
            key="git",
            name="Git Configuration",
            category=conf,
            detect=all_of(
                p.git_config("user.name", lambda s: s.git.user_name),
                p.git_config("user.email", lambda s: s.git.user_email),
                p.git_config("color.ui", lambda s: s.git.color_ui),
                name="git identity",
            ),
            install=actions.configure_git,
        ),
        Item(
            key="gitCompletion",
            name="Git Bash Completion",
            category=dev,
            detect=p.brew_formula("bash-completion"),
            install=actions.brew_formula("git", "bash-completion"),
        ),
        Item(
            key=CREDENTIALS_KEY,
            name="SSH Keys Setup",
            category=conf,
            detect=p.ssh_keys_present(),
            install=actions.transfer_ssh_keys,
        ),
        Item(
            key="nodeModules",
            name="Node Modules Permissions",
            category=conf,
            detect=p.owned_by_user("node_modules", lambda s: s.paths.node_modules_dir),
            install=actions.fix_node_modules_permissions,
        ),
        _gui_app("cursor", "Cursor", dev, "cursor", "Cursor", "com.cursor.Cursor"),
        Item(
            key="docker",
            name="Docker",
            category=dev,
            detect=any_of(
                p.brew_cask("docker"),
                p.app_bundle("Docker"),
                p.spotlight_bundle("com.docker.docker"),
                p.command_succeeds("docker", "info"),
            ),
            install=actions.brew_cask("docker"),
            notes="You'll need to start Docker Desktop manually after installation.",
        ),
    ])
