"""
lets-ls Language Server.

Registers LSP capabilities and wires the tree-sitter backed handlers. The
open-document store is the pygls workspace.
"""

import logging
from pathlib import Path
from typing import Optional

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer
from pygls.uris import from_fs_path, uri_scheme

from lets_ls import __version__
from lets_tree_sitter import ConfigError

from .config import ServerConfig
from .handlers import FeatureHandlers
from .logging_setup import configure_logging
from .positions import to_byte_position

logger = logging.getLogger(__name__)

SERVER_NAME = "lets-ls"


class LetsLanguageServer(LanguageServer):
    def __init__(self, config: ServerConfig, handlers: FeatureHandlers):
        super().__init__(SERVER_NAME, __version__, text_document_sync_kind=lsp.TextDocumentSyncKind.Full)
        self.lets_config = config
        self.feature_handlers = handlers


def _document(server: LetsLanguageServer, uri: str):
    # mixins resolve against the filesystem, so only file: documents apply
    if uri_scheme(uri) != "file":
        logger.debug("ignoring %s: not a file", uri)
        return None

    document = server.workspace.get_text_document(uri)
    if not document.path or not server.lets_config.matches_document(document.path):
        logger.debug("ignoring %s: not a lets config", uri)
        return None
    return document


def initialize(server: LetsLanguageServer, params: lsp.InitializeParams) -> None:
    try:
        config = server.lets_config.merged_with(params.initialization_options)
        configure_logging(config.log_level, config.log_path)
    except ConfigError as e:
        logger.warning("%s; keeping current settings", e)
        return
    server.lets_config = config
    logger.info("%s %s initialized", SERVER_NAME, __version__)


def completion(server: LetsLanguageServer, params: lsp.CompletionParams) -> lsp.CompletionList:
    items: list[lsp.CompletionItem] = []
    document = _document(server, params.text_document.uri)
    if document is not None:
        text = document.source
        pos = to_byte_position(text, params.position.line, params.position.character)
        items = [
            lsp.CompletionItem(label=candidate.label, kind=lsp.CompletionItemKind.Keyword)
            for candidate in server.feature_handlers.complete(text, pos)
        ]
    return lsp.CompletionList(is_incomplete=False, items=items)


def definition(server: LetsLanguageServer, params: lsp.DefinitionParams) -> Optional[lsp.Location]:
    document = _document(server, params.text_document.uri)
    if document is None:
        return None

    text = document.source
    pos = to_byte_position(text, params.position.line, params.position.character)
    target = server.feature_handlers.find_definition(text, pos, Path(document.path))
    if target is None:
        return None

    start = lsp.Position(line=0, character=0)
    return lsp.Location(uri=from_fs_path(str(target)), range=lsp.Range(start=start, end=start))


def create_server(config: Optional[ServerConfig] = None, handlers: Optional[FeatureHandlers] = None) -> LetsLanguageServer:
    """Build a server with all features registered. Raises GrammarLoadError early."""
    server = LetsLanguageServer(config or ServerConfig(), handlers or FeatureHandlers())

    @server.feature(lsp.INITIALIZE)
    def _initialize(params: lsp.InitializeParams) -> None:
        initialize(server, params)

    @server.feature(lsp.TEXT_DOCUMENT_COMPLETION, lsp.CompletionOptions())
    def _completion(params: lsp.CompletionParams) -> lsp.CompletionList:
        return completion(server, params)

    @server.feature(lsp.TEXT_DOCUMENT_DEFINITION)
    def _definition(params: lsp.DefinitionParams) -> Optional[lsp.Location]:
        return definition(server, params)

    return server
