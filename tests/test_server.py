import logging
from unittest.mock import MagicMock

import pytest
from lsprotocol import types as lsp
from pygls.uris import from_fs_path

from lets_ls import __version__
from lets_ls.config import ServerConfig
from lets_ls.handlers import FeatureHandlers
from lets_ls.logging_setup import configure_logging
from lets_ls.server import LetsLanguageServer, completion, create_server, definition, initialize

DOC = """shell: bash
mixins:
  - lets.my.yaml
commands:
  test:
    cmd: echo Test

  test2:
    depends:
      -
    cmd: echo Test2"""


@pytest.fixture
def server(tmp_path):
    fake = MagicMock()
    fake.lets_config = ServerConfig()
    fake.feature_handlers = FeatureHandlers()
    fake.workspace.get_text_document.return_value = MagicMock(source=DOC, path=str(tmp_path / "lets.yaml"))
    return fake


def _position_params(cls, uri, line, character):
    return cls(
        text_document=lsp.TextDocumentIdentifier(uri=uri),
        position=lsp.Position(line=line, character=character),
    )


def test_create_server():
    server = create_server()
    assert isinstance(server, LetsLanguageServer)
    assert server.name == "lets-ls"
    assert server.version == __version__


def test_completion_in_depends(server):
    params = _position_params(lsp.CompletionParams, "file:///work/lets.yaml", 9, 7)
    result = completion(server, params)

    assert result.is_incomplete is False
    assert [item.label for item in result.items] == ["test"]
    assert result.items[0].kind == lsp.CompletionItemKind.Keyword


def test_completion_outside_constructs(server):
    params = _position_params(lsp.CompletionParams, "file:///work/lets.yaml", 0, 0)
    assert completion(server, params).items == []


def test_completion_ignores_other_yaml_files(server, tmp_path):
    server.workspace.get_text_document.return_value = MagicMock(source=DOC, path=str(tmp_path / "ci.yaml"))
    params = _position_params(lsp.CompletionParams, "file:///work/ci.yaml", 9, 7)

    assert completion(server, params).items == []


def test_definition_points_at_mixin_file(server, tmp_path):
    target = tmp_path / "lets.my.yaml"
    target.write_text("shell: bash\n")

    params = _position_params(lsp.DefinitionParams, "file:///work/lets.yaml", 2, 10)
    location = definition(server, params)

    assert location.uri == from_fs_path(str(target))
    assert location.range.start == lsp.Position(line=0, character=0)
    assert location.range.end == lsp.Position(line=0, character=0)


def test_definition_missing_mixin_file(server):
    params = _position_params(lsp.DefinitionParams, "file:///work/lets.yaml", 2, 10)
    assert definition(server, params) is None


def test_initialize_applies_initialization_options(server, tmp_path):
    log_file = tmp_path / "lets-ls.log"
    params = lsp.InitializeParams(
        process_id=None,
        capabilities=lsp.ClientCapabilities(),
        initialization_options={"log_path": str(log_file), "log_level": "debug"},
    )

    try:
        initialize(server, params)
        assert server.lets_config.log_path == str(log_file)
        assert server.lets_config.log_level == "DEBUG"
        assert log_file.exists()
        assert logging.getLogger("lets_ls").level == logging.DEBUG
    finally:
        configure_logging("INFO")


def test_initialize_keeps_config_on_bad_options(server):
    params = lsp.InitializeParams(
        process_id=None,
        capabilities=lsp.ClientCapabilities(),
        initialization_options={"log_level": "LOUD"},
    )
    initialize(server, params)
    assert server.lets_config == ServerConfig()


def test_initialize_keeps_config_on_non_object_options(server):
    params = lsp.InitializeParams(
        process_id=None,
        capabilities=lsp.ClientCapabilities(),
        initialization_options=["log_level", "DEBUG"],
    )
    initialize(server, params)
    assert server.lets_config == ServerConfig()


def test_initialize_keeps_logging_on_unwritable_log_path(server, tmp_path):
    configure_logging("INFO")
    handlers_before = list(logging.getLogger("lets_ls").handlers)
    params = lsp.InitializeParams(
        process_id=None,
        capabilities=lsp.ClientCapabilities(),
        initialization_options={"log_path": str(tmp_path / "missing" / "lets-ls.log")},
    )

    initialize(server, params)

    assert server.lets_config == ServerConfig()
    assert logging.getLogger("lets_ls").handlers == handlers_before
    assert not (tmp_path / "missing").exists()


@pytest.mark.parametrize("uri", ["untitled:Untitled-1", "git:/work/lets.yaml"])
def test_non_file_documents_are_ignored(server, uri):
    assert completion(server, _position_params(lsp.CompletionParams, uri, 9, 7)).items == []
    assert definition(server, _position_params(lsp.DefinitionParams, uri, 2, 10)) is None
    server.workspace.get_text_document.assert_not_called()
