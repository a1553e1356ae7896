import io

import pytest
from rich.console import Console
from typer.testing import CliRunner

from cmsclient import main
from cmsclient.core.command_handler import CommandHandler
from cmsclient.infrastructure.cli.display import ConsoleDisplay


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def wired_app(monkeypatch, management, delivery, output):
    """Wires the CLI to clients on the recording transport and a captured console.

    Real CommandHandler, ConsoleDisplay, services and pipeline; only the
    network is replaced.
    """
    ui = ConsoleDisplay(console=Console(file=output, width=200, color_system=None))
    handler = CommandHandler(ui=ui, management_factory=lambda: management, delivery_factory=lambda: delivery)
    monkeypatch.setattr(main, "_dependencies", {"ui": ui, "command_handler": handler})
    return main.app


def test_spaces_command_flow(runner: CliRunner, wired_app, transport, output, make_sys):
    transport.queue({
        "total": 2, "skip": 0, "limit": 100,
        "items": [{"name": "Blog", "sys": make_sys("s1", "Space")}, {"name": "Docs", "sys": make_sys("s2", "Space")}],
    })

    result = runner.invoke(wired_app, ["spaces"])

    assert result.exit_code == 0, result.output
    assert transport.last.url == "https://api.contentful.com/spaces"
    rendered = output.getvalue()
    assert "Blog" in rendered and "Docs" in rendered
    assert "Showing 2 of 2" in rendered


def test_entries_command_passes_params_to_delivery(runner: CliRunner, wired_app, transport):
    transport.queue({"total": 0, "skip": 0, "limit": 100, "items": []})

    result = runner.invoke(
        wired_app,
        ["entries", "space123", "--param", "content_type=post", "--param", "include=2", "--limit", "500", "--delivery"],
    )

    assert result.exit_code == 0, result.output
    assert transport.last.url == "https://cdn.contentful.com/spaces/space123/entries"
    assert transport.last.params == [
        ("content_type", "post"),
        ("include", "2"),
        ("limit", "100"),
        ("skip", "0"),
        ("locale", "*"),
    ]


def test_malformed_param_is_rejected(runner: CliRunner, wired_app, transport):
    result = runner.invoke(wired_app, ["entries", "space123", "--param", "no-equals-sign"])
    assert result.exit_code != 0
    assert transport.requests == []


def test_api_error_exits_with_code_one(runner: CliRunner, wired_app, transport, output):
    transport.queue({"message": "The resource could not be found.", "requestId": "r9", "sys": {"type": "Error", "id": "NotFound"}}, 404)

    result = runner.invoke(wired_app, ["entry", "space123", "missing"])

    assert result.exit_code == 1
    assert "The resource could not be found." in output.getvalue()


def test_publish_entry_flow(runner: CliRunner, wired_app, transport, output, make_sys):
    body = {"fields": {"title": {"en-US": "Hi"}}, "sys": make_sys("e1", "Entry", version=2)}
    transport.queue(body).queue({**body, "sys": make_sys("e1", "Entry", version=3)})

    result = runner.invoke(wired_app, ["publish-entry", "space123", "e1"])

    assert result.exit_code == 0, result.output
    assert [r.method for r in transport.requests] == ["GET", "PUT"]
    assert transport.last.url.endswith("/spaces/space123/entries/e1/published")
    assert "published (version 3)" in output.getvalue()


def test_create_api_key_flow(runner: CliRunner, wired_app, transport, make_sys):
    transport.queue({"name": "Site", "accessToken": "tok", "sys": make_sys("k1", "ApiKey")})

    result = runner.invoke(wired_app, ["create-api-key", "space123", "Site", "--description", "Public"])

    assert result.exit_code == 0, result.output
    assert transport.last.json == {"name": "Site", "description": "Public"}


def test_invalid_limit_exits_with_code_one(runner: CliRunner, wired_app, transport):
    result = runner.invoke(wired_app, ["assets", "space123", "--limit", "0"])
    assert result.exit_code == 1
    assert transport.requests == []


def test_parse_params():
    assert main.parse_params(["a=1", "b=x=y", "empty="]) == {"a": "1", "b": "x=y", "empty": ""}
    assert main.parse_params(None) == {}


def test_verbose_flag_reaches_logging_setup(runner: CliRunner, wired_app, transport, monkeypatch, mocker):
    monkeypatch.setitem(main._options, "verbose", False)
    transport.queue({"total": 0, "skip": 0, "limit": 100, "items": []})

    result = runner.invoke(wired_app, ["--verbose", "locales", "space123"])
    assert result.exit_code == 0, result.output
    assert main._options["verbose"] is True

    mocker.patch.object(main, "load_configuration")
    configure_logging = mocker.patch.object(main, "configure_logging")
    main.create_dependencies()
    configure_logging.assert_called_once_with(verbose=True)
