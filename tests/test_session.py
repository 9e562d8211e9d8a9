"""
Tests for the interactive session — phase order, bootstrap, store gate,
install loop and summary, driven through a small fake catalog.
"""

import pytest

from macsetup.core.errors import BootstrapDeclined, InstallError
from macsetup.core.models import Catalog, Category, Item, Signal
from macsetup.core.use_cases.session import Phase, Session


@pytest.fixture
def state():
    """A machine where the package manager, keys and store are ready."""
    return {
        "pm": True,
        "creds": True,
        "store": True,
        "signed_in": True,
        "app1": False,
        "app2": False,
        "tool": False,
        "suite": False,
        "fail": set(),
        "installed": [],
    }


def _present(state, key):
    return Signal(key, lambda ctx: state[key])


def _install(state, key, also=()):
    def action(ctx):
        state["installed"].append(key)
        if key in state["fail"]:
            raise InstallError(f"{key} broke")
        state[key] = True
        for other in also:
            state[other] = True

    return action


def _catalog(state):
    dev = Category.DEVELOPMENT
    return Catalog([
        Item("pm", "Package Manager", dev, _present(state, "pm"), _install(state, "pm")),
        Item(
            "store", "Store CLI", dev, _present(state, "store"), _install(state, "store"),
            auth=Signal("signed_in", lambda ctx: state["signed_in"]),
            auth_instructions=("Open the store and sign in",),
        ),
        Item("app1", "Alpha App", Category.PRODUCTIVITY, _present(state, "app1"),
             _install(state, "app1"), depends_on="store"),
        Item("app2", "Beta App", Category.PRODUCTIVITY, _present(state, "app2"),
             _install(state, "app2"), depends_on="store"),
        Item("tool", "Tool", Category.UTILITIES, _present(state, "tool"), _install(state, "tool")),
        Item("suite", "Suite", Category.UTILITIES, _present(state, "suite"),
             _install(state, "suite", also=("tool",))),
        Item("creds", "Credentials", Category.CONFIGURATION, _present(state, "creds"),
             _install(state, "creds")),
    ])


@pytest.fixture
def run(state, ctx):
    def factory(context=None):
        session = Session(
            _catalog(state),
            context or ctx,
            package_manager_key="pm",
            credentials_key="creds",
        )
        return session.run()

    return factory


# ── Happy path ───────────────────────────────────────────────────────


class TestHappyPath:
    def test_phases_in_order(self, run, prompts):
        prompts.selection = ["tool"]
        result = run()
        assert result.phases == [
            Phase.SSH_CHECK,
            Phase.BOOTSTRAP,
            Phase.STATUS_SCAN,
            Phase.SELECTION,
            Phase.STORE_GATE,
            Phase.INSTALL_LOOP,
            Phase.SUMMARY,
        ]

    def test_installs_selection(self, run, state, prompts, output):
        prompts.selection = ["tool", "app1"]
        result = run()

        assert state["installed"] == ["tool", "app1"]
        assert result.successful == ["tool", "app1"]
        assert result.failed == []
        assert prompts.asked == []
        assert "Mac Setup CLI" in output()
        assert "Installed: 2 apps" in output()

    def test_snapshot_covers_catalog(self, run, prompts):
        result = run()
        assert result.snapshot == {
            "pm": True, "store": True, "app1": False, "app2": False,
            "tool": False, "suite": False, "creds": True,
        }

    def test_choices(self, run, prompts):
        run()
        (choices,) = prompts.select_calls
        assert [c.value for c in choices] == ["app1", "app2", "suite", "tool", "creds", "store"]
        assert [c.disabled for c in choices[4:]] == ["Already installed"] * 2
        assert all(c.disabled is None for c in choices[:4])

    def test_package_manager_never_offered(self, run, state, prompts):
        result = run()
        assert "pm" not in result.offered
        assert all(c.value != "pm" for c in prompts.select_calls[0])

    def test_empty_selection(self, run, state, prompts, output):
        result = run()
        assert result.selected == []
        assert result.results == []
        assert "Installed: 0 apps" in output()

    def test_everything_present(self, run, state, prompts, output):
        for key in ("app1", "app2", "tool", "suite"):
            state[key] = True
        result = run()

        assert result.offered == []
        assert all(c.disabled for c in prompts.select_calls[0])
        assert result.successful == []
        assert result.failed == []
        assert "Installed: 0 apps" in output()
        assert "Failed: 0 apps" in output()

    def test_selection_limited_to_offered(self, run, prompts):
        prompts.selection = ["store", "pm", "ghost", "tool"]
        result = run()
        assert result.selected == ["tool"]

    def test_to_dict(self, run, prompts):
        prompts.selection = ["tool"]
        data = run().to_dict()
        assert data["dry_run"] is False
        assert data["successful"] == ["tool"]
        assert data["phases"][0] == "ssh_check"
        assert data["results"][0]["key"] == "tool"


# ── Install loop ─────────────────────────────────────────────────────


class TestInstallLoop:
    def test_already_present_at_install_time_is_skipped(self, run, state, prompts, output):
        prompts.selection = ["suite", "tool"]
        result = run()

        assert state["installed"] == ["suite"]
        assert result.successful == ["suite"]
        assert result.skipped == ["tool"]
        assert "Tool is already installed" in output()

    def test_failure_does_not_stop_loop(self, run, state, prompts, output):
        state["fail"] = {"tool"}
        prompts.selection = ["tool", "app2"]
        result = run()

        assert result.failed == ["tool"]
        assert result.successful == ["app2"]
        assert "Failed: 1 apps" in output()


# ── Bootstrap ────────────────────────────────────────────────────────


class TestBootstrap:
    def test_declined_ends_session(self, run, state, prompts):
        state["pm"] = False
        prompts.confirms = [False]

        with pytest.raises(BootstrapDeclined):
            run()

        assert prompts.asked == [
            "Package Manager is required but not installed. Would you like to install it?"
        ]
        assert prompts.select_calls == []
        assert state["installed"] == []

    def test_accepted(self, run, state, prompts):
        state["pm"] = False
        prompts.confirms = [True]
        prompts.selection = ["tool"]

        result = run()

        assert [r.key for r in result.bootstrap] == ["pm"]
        assert result.bootstrap[0].succeeded
        assert state["installed"] == ["pm", "tool"]

    def test_failed_install_ends_session(self, run, state, prompts):
        state["pm"] = False
        state["fail"] = {"pm"}
        prompts.confirms = [True]

        with pytest.raises(BootstrapDeclined, match="could not be installed"):
            run()
        assert prompts.select_calls == []


# ── SSH check ────────────────────────────────────────────────────────


class TestSshCheck:
    def test_offers_transfer_first(self, run, state, prompts):
        state["creds"] = False
        prompts.confirms = [True]

        result = run()

        assert prompts.asked == ["Would you like to set up SSH keys now?"]
        assert [r.key for r in result.bootstrap] == ["creds"]
        assert state["creds"] is True

    def test_declined_continues(self, run, state, prompts, output):
        state["creds"] = False
        prompts.confirms = [False]

        result = run()

        assert "Proceeding without SSH keys" in output()
        assert "creds" in result.offered
        assert result.bootstrap == []

    def test_ssh_runs_before_bootstrap(self, run, state, prompts):
        state["creds"] = False
        state["pm"] = False
        prompts.confirms = [False, False]

        with pytest.raises(BootstrapDeclined):
            run()
        assert prompts.asked[0] == "Would you like to set up SSH keys now?"


# ── Store gate ───────────────────────────────────────────────────────


class TestStoreGate:
    def test_signed_out_and_declined_drops_dependents(self, run, state, prompts, output):
        state["signed_in"] = False
        prompts.selection = ["app1", "app2", "tool"]
        prompts.confirms = [False]

        result = run()

        assert prompts.asked == ["Have you signed in?"]
        assert result.dropped == ["app1", "app2"]
        assert result.selected == ["tool"]
        assert state["installed"] == ["tool"]
        assert "Skipping Alpha App, Beta App: Store CLI is not signed in." in output()
        assert "Skipped (not signed in): 2 apps" in output()

    def test_signs_in_once(self, run, state, prompts):
        state["signed_in"] = False

        def sign_in(message):
            state["signed_in"] = True
            return True

        prompts.selection = ["app1", "app2"]
        prompts.confirms = [sign_in]

        result = run()

        assert prompts.asked == ["Have you signed in?"]
        assert result.dropped == []
        assert result.successful == ["app1", "app2"]

    def test_absent_store_is_left_to_installer(self, run, state, prompts):
        state["store"] = False
        prompts.selection = ["app1", "app2"]
        prompts.confirms = [True]

        result = run()

        assert prompts.asked == ["Would you like to install Store CLI?"]
        assert state["installed"] == ["store", "app1", "app2"]
        assert result.successful == ["app1", "app2"]

    def test_absent_store_declined_once(self, run, state, prompts):
        state["store"] = False
        prompts.selection = ["app1", "app2"]
        prompts.confirms = [False]

        result = run()

        assert prompts.asked == ["Would you like to install Store CLI?"]
        assert result.failed == ["app1", "app2"]
        assert result.results[1].message == "Store CLI is required for Beta App."
        assert result.results[0].metadata == {"dependency": "store"}
        assert state["installed"] == []

    def test_absent_store_installed_then_sign_in_declined_once(self, run, state, prompts):
        state["store"] = False
        state["signed_in"] = False
        prompts.selection = ["app1", "app2", "tool"]
        prompts.confirms = [True, False]

        result = run()

        assert prompts.asked == [
            "Would you like to install Store CLI?",
            "Have you signed in?",
        ]
        assert result.failed == ["app1", "app2"]
        assert result.successful == ["tool"]
        assert result.results[1].message == (
            "Store CLI is not signed in. Cannot proceed with Beta App."
        )
        assert state["installed"] == ["store", "tool"]

    def test_not_consulted_without_store_items(self, run, state, prompts):
        state["signed_in"] = False
        prompts.selection = ["tool"]
        result = run()
        assert prompts.asked == []
        assert result.successful == ["tool"]


# ── Dry run ──────────────────────────────────────────────────────────


class TestDryRun:
    def test_nothing_changes(self, run, make_ctx, state, prompts, output):
        state["pm"] = False
        state["creds"] = False
        state["signed_in"] = False
        prompts.confirms = [True]
        prompts.selection = ["app1", "tool"]

        result = run(make_ctx(dry_run=True))

        assert state["installed"] == []
        assert result.dry_run
        assert Phase.SSH_CHECK not in result.phases
        assert Phase.STORE_GATE not in result.phases
        assert prompts.asked == [
            "[DRY RUN] Package Manager is required but not installed. "
            "Would you like to install it?"
        ]
        assert result.bootstrap[0].simulated
        assert result.successful == ["app1", "tool"]
        assert all(r.simulated for r in result.results)
        assert "[DRY RUN MODE]" in output()
        assert "Would be installed: 2 apps" in output()

    def test_simulated_install_leaves_later_items_absent(self, run, make_ctx, prompts):
        prompts.selection = ["suite", "tool"]
        result = run(make_ctx(dry_run=True))
        assert result.successful == ["suite", "tool"]
        assert result.skipped == []
