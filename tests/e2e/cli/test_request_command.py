"""End-to-end tests for ``shortinit request``."""

import pytest

from shortinit.entrypoints.cli.main import shortinit

# pylint: disable=unused-argument, magic-value-comparison

GLYPHS = ("\U0001f97e", "[BOOT]")


def invoke(runner, *args, env=None):
    return runner.invoke(
        shortinit, ["--log-path", "request.log", "request", *args], env=env
    )


def state_lines(output: str) -> dict[str, str]:
    """Parse the ``--show-state`` summary into a dict."""
    lines = {}
    for line in output.splitlines():
        key, sep, value = line.partition(": ")
        if sep:
            lines[key] = value
    return lines


def test_default_request_prints_boot(runner, fs):
    """The shipped configuration serves / and prints the boot."""
    result = invoke(runner)
    assert result.exit_code == 0, result.output
    assert any(glyph in result.output for glyph in GLYPHS)


def test_show_state_default(runner, fs):
    """Parsing is skipped and every default feature is suppressed."""
    result = invoke(runner, "--show-state")
    assert result.exit_code == 0, result.output
    state = state_lines(result.output)
    assert state["status"] == "200"
    assert state["parsed"] == "False"
    assert state["query vars"] == "{}"
    assert state["states"] == (
        "init > parse > headers > query_string > query > "
        "resolve_status > publish > notify > output"
    )
    assert state["loaded"].startswith("vars, pluggable, user")
    assert state["suppressed"] == "kses, rest_api, post_formats, comment_closing"


def test_parsed_request_matches_post(runner, fs):
    """With --parse the rewrite rule feeds the boot query var."""
    result = invoke(
        runner, "/boot/chelsea", "--parse", "--post", "boot=chelsea", "--show-state"
    )
    assert result.exit_code == 0, result.output
    state = state_lines(result.output)
    assert state["status"] == "200"
    assert state["parsed"] == "True"
    assert state["query vars"] == '{"boot": "chelsea"}'
    assert "option" in state["loaded"]


def test_not_found_policy(runner, fs):
    """--not-found resolves the request to 404."""
    result = invoke(runner, "/boot/brogue", "--parse", "--not-found", "--show-state")
    assert result.exit_code == 0, result.output
    assert state_lines(result.output)["status"] == "404"


@pytest.mark.parametrize(
    ("post", "status"), [("boot=chelsea", "200"), ("boot=oxford", "404")]
)
def test_core_404_handler(runner, fs, post, status):
    """--default-404 leaves the status to the core's own handler."""
    result = invoke(
        runner,
        "/boot/chelsea",
        "--parse",
        "--default-404",
        "--post",
        post,
        "--show-state",
    )
    assert result.exit_code == 0, result.output
    assert state_lines(result.output)["status"] == status


def test_extra_var_replaces_configured_list(runner, fs):
    """--extra-var names the recognized extras for this run."""
    result = invoke(
        runner, "/?shoe=oxford&boot=x", "--parse", "--extra-var", "shoe", "--show-state"
    )
    assert result.exit_code == 0, result.output
    assert state_lines(result.output)["query vars"] == '{"shoe": "oxford"}'


def test_without_users(runner, fs):
    """--no-users loads only the legacy request variables."""
    result = invoke(runner, "--no-users", "--show-state")
    assert result.exit_code == 0, result.output
    assert state_lines(result.output)["loaded"] == "vars"


def test_preloaded_feature_is_not_suppressed(runner, fs):
    """A feature loaded by the core keeps its default hooks."""
    result = invoke(runner, "--preload", "kses", "--user", "1", "--show-state")
    assert result.exit_code == 0, result.output
    state = state_lines(result.output)
    assert state["suppressed"] == "rest_api, post_formats, comment_closing"
    assert state["loaded"].startswith("kses, vars")


def test_unknown_preload_target_fails(runner, fs):
    """An unknown load target is reported and exits non-zero."""
    result = invoke(runner, "--preload", "nope")
    assert result.exit_code == 1
    assert "No load target named 'nope'" in result.output


def test_env_settings_are_read(runner, fs):
    """SHORTINIT_* variables configure the request."""
    result = invoke(
        runner, "--show-state", env={"SHORTINIT_SKIP_REQUEST_PARSING": "0"}
    )
    assert result.exit_code == 0, result.output
    assert state_lines(result.output)["parsed"] == "True"


def test_full_boot_mode_is_rejected(runner, fs):
    """An unsupported boot mode is a usage error."""
    result = invoke(runner, env={"SHORTINIT_BOOT_MODE": "full"})
    assert result.exit_code == 1
    assert "SHORTINIT_BOOT_MODE" in result.output


def test_verbose_logs_bootstrap_summary(runner, fs):
    """-v shows the bootstrap summary on the console."""
    result = runner.invoke(
        shortinit, ["-v", "--log-path", "request.log", "request"]
    )
    assert result.exit_code == 0, result.output
    assert "Bootstrapped" in result.output


def test_show_state_reports_success(runner, fs):
    """--show-state closes with a success line naming the status."""
    result = invoke(runner, "/boot/chelsea", "--show-state")
    assert result.exit_code == 0, result.output
    assert "Served /boot/chelsea with status 200" in result.output


def test_not_found_with_core_404_warns(runner, fs):
    """--not-found cannot steer the core's own 404 handler."""
    result = invoke(
        runner,
        "/boot/chelsea",
        "--parse",
        "--default-404",
        "--not-found",
        "--post",
        "boot=chelsea",
        "--show-state",
    )
    assert result.exit_code == 0, result.output
    assert "--not-found has no effect" in result.output
    assert state_lines(result.output)["status"] == "200"


def test_not_found_with_custom_policy_does_not_warn(runner, fs):
    """The flag is silent when the custom policy is in effect."""
    result = invoke(runner, "/boot/brogue", "--parse", "--not-found")
    assert result.exit_code == 0, result.output
    assert "no effect" not in result.output


def test_vv_reports_settings_and_suppression(runner, fs):
    """-vv shows the resolved settings and what the bootstrap unhooked."""
    result = runner.invoke(
        shortinit,
        ["-vv", "--log-path", "request.log", "request", "--no-parse"],
        env={"COLUMNS": "200"},
    )
    assert result.exit_code == 0, result.output
    assert "request parsing=skipped" in result.output
    assert (
        "Suppressed features: kses, rest_api, post_formats, comment_closing"
        in result.output
    )
