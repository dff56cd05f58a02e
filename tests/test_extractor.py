import pytest
from lets_symbols import Command, SymbolExtractor
from lets_tree_sitter import LetsPatterns, Position, PositionType

DOC = """shell: bash
mixins:
  - lets.my.yaml
commands:
  test:
    cmd: echo Test
  test2:
    cmd: echo Test2"""


@pytest.fixture(scope="module")
def extractor():
    return SymbolExtractor()


@pytest.mark.parametrize(
    "pos, expected",
    [
        (Position(1, 0), None),
        (Position(2, 0), "lets.my.yaml"),
        (Position(2, 15), "lets.my.yaml"),
        (Position(2, 40), "lets.my.yaml"),
        (Position(3, 0), None),
    ],
)
def test_extract_filename_from_mixins_item(extractor, pos, expected):
    assert extractor.extract_filename(DOC, pos) == expected


def test_extract_filename_keeps_text_as_written(extractor):
    doc = "mixins:\n  - ./shared/lets.build.yaml\n  - other.yaml\n"

    assert extractor.extract_filename(doc, Position(1, 4)) == "./shared/lets.build.yaml"
    assert extractor.extract_filename(doc, Position(2, 4)) == "other.yaml"


def test_filename_agrees_with_mixins_classification(extractor):
    pos = Position(2, 10)
    assert LetsPatterns().get_position_type(DOC, pos) is PositionType.MIXINS
    assert extractor.extract_filename(DOC, pos) == "lets.my.yaml"


def test_get_commands(extractor):
    commands = extractor.get_commands(DOC)
    assert commands == [Command(name="test"), Command(name="test2")]


def test_get_commands_is_deterministic(extractor):
    assert extractor.get_commands(DOC) == extractor.get_commands(DOC)


def test_get_commands_keeps_duplicates(extractor):
    doc = "commands:\n  build:\n    cmd: make\n  build:\n    cmd: make all\n"
    assert [c.name for c in extractor.get_commands(doc)] == ["build", "build"]


def test_get_commands_without_commands_section(extractor):
    assert extractor.get_commands("shell: bash\nmixins:\n  - a.yaml\n") == []


def test_get_commands_ignores_nested_commands_key(extractor):
    doc = "env:\n  commands:\n    fake:\n      cmd: echo\ncommands:\n  real:\n    cmd: echo real\n"
    assert extractor.get_commands(doc) == [Command(name="real")]


def test_get_current_command(extractor):
    assert extractor.get_current_command(DOC, Position(5, 4)) == Command(name="test")


def test_get_current_command_on_unrelated_field(extractor):
    # any position inside the body, not only the depends line
    assert extractor.get_current_command(DOC, Position(7, 12)) == Command(name="test2")


def test_get_current_command_in_depends(extractor):
    doc = """shell: bash
mixins:
  - lets.my.yaml
commands:
  test:
    cmd: echo Test
  test2:
    cmd: echo Test2
  test3:
    depends: [test, ]
    cmd: echo Test3"""

    assert extractor.get_current_command(doc, Position(9, 20)) == Command(name="test3")


@pytest.mark.parametrize("pos", [Position(3, 0), Position(4, 2), Position(0, 3)])
def test_get_current_command_outside_bodies(extractor, pos):
    assert extractor.get_current_command(DOC, pos) is None


def test_malformed_text_returns_not_found(extractor):
    doc = "commands:\n  test: [unclosed\nmixins:\n  - "
    pos = Position(1, 10)

    assert extractor.extract_filename(doc, pos) is None
    assert isinstance(extractor.get_commands(doc), list)
