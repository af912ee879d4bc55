"""Command line tests for ``uhmlx build``."""

import json

import pytest

from uhmlx import __version__
from uhmlx.cli import build_parser, main


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "components").mkdir()
    (tmp_path / "data").mkdir()
    (tmp_path / "styles").mkdir()
    (tmp_path / "components" / "Row.uhmlx").write_text(
        '@props { row }\nTextBlock(Text="{{ row.Name }}", Style="{StaticResource Cell}")',
        encoding="utf-8",
    )
    (tmp_path / "data" / "items.json").write_text(
        json.dumps([{"Name": "First"}, {"Name": "Second"}]),
        encoding="utf-8",
    )
    (tmp_path / "styles" / "TextBlock.Cell.uhmls").write_text(
        'Style(TargetType="TextBlock", x:Key="Cell")',
        encoding="utf-8",
    )
    (tmp_path / "main.uhmlx").write_text(
        '@useComponents { Row "components/Row.uhmlx" }\n'
        '@useData { items "data/items.json" }\n'
        "Page {\n"
        "  Page.Resources { #__Style__ }\n"
        "  StackPanel { {{ for item in items }} #Row(row=\"{{ item }}\") {{ end for }} }\n"
        "}\n",
        encoding="utf-8",
    )
    return tmp_path


def test_build_writes_all_artifacts(workspace, capsys) -> None:
    assert main(["build", "main.uhmlx", "--workspace", str(workspace)]) == 0

    output = workspace / "output"
    xaml = (output / "main.xaml").read_text(encoding="utf-8")
    assert '<Style TargetType="TextBlock" x:Key="Cell" />' in xaml
    assert 'TextBlock Text="First" Style="{StaticResource Cell}"' in xaml
    assert 'TextBlock Text="Second"' in xaml

    ast = json.loads((output / "main.AST.json").read_text(encoding="utf-8"))
    assert ast["type"] == "Program"
    stamp = (output / "main.xaml.ini").read_text(encoding="utf-8")
    assert len(stamp) == 16
    int(stamp, 16)

    out = capsys.readouterr().out
    assert "XAML written to" in out
    assert "Styles spliced: TextBlock.Cell" in out


def test_output_directory_argument_and_no_ast(workspace) -> None:
    assert main(["build", "main.uhmlx", "dist", "--workspace", str(workspace), "--no-ast"]) == 0
    assert (workspace / "dist" / "main.xaml").is_file()
    assert not (workspace / "dist" / "main.AST.json").exists()


def test_config_controls_outputs(workspace) -> None:
    (workspace / ".uhmlxrc").write_text(
        json.dumps({"defaults": {"output_dir": "gen", "write_stamp": False}}),
        encoding="utf-8",
    )
    assert main(["build", "main.uhmlx", "--workspace", str(workspace)]) == 0
    assert (workspace / "gen" / "main.xaml").is_file()
    assert not (workspace / "gen" / "main.xaml.ini").exists()


def test_static_strings_are_inlined(workspace) -> None:
    (workspace / "data" / "StaticStrings.xaml").write_text('<x:String x:Key="A">A</x:String>', encoding="utf-8")
    (workspace / "strings.uhmlx").write_text('ResourceDictionary { "<#__StaticString />" }', encoding="utf-8")
    assert main(["build", "strings.uhmlx", "--workspace", str(workspace)]) == 0
    xaml = (workspace / "output" / "strings.xaml").read_text(encoding="utf-8")
    assert '<x:String x:Key="A">A</x:String>' in xaml


def test_legacy_bare_file_invocation(workspace) -> None:
    assert main(["main.uhmlx", "--workspace", str(workspace)]) == 0
    assert (workspace / "output" / "main.xaml").is_file()


def test_missing_input_file(tmp_path, capsys) -> None:
    assert main(["build", "missing.uhmlx", "--workspace", str(tmp_path)]) == 1
    assert "CLI_FILE_NOT_FOUND" in capsys.readouterr().err


def test_missing_workspace(tmp_path, capsys) -> None:
    assert main(["build", "main.uhmlx", "--workspace", str(tmp_path / "nope")]) == 1
    assert "CLI_FILE_NOT_FOUND" in capsys.readouterr().err


def test_syntax_error_exit_status(tmp_path, capsys) -> None:
    (tmp_path / "broken.uhmlx").write_text("Grid {", encoding="utf-8")
    assert main(["build", "broken.uhmlx", "--workspace", str(tmp_path)]) == 1
    assert "PARSE_ERROR" in capsys.readouterr().err
    assert not (tmp_path / "output").exists()


def test_loader_error_exit_status(tmp_path, capsys) -> None:
    (tmp_path / "main.uhmlx").write_text('@useData { items "data/none.json" }\nGrid', encoding="utf-8")
    assert main(["build", "main.uhmlx", "--workspace", str(tmp_path)]) == 1
    assert "LOADER_ERROR" in capsys.readouterr().err


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: uhmlx" in capsys.readouterr().out


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_build_parser_defaults() -> None:
    args = build_parser().parse_args(["build"])
    assert args.input == "Custom.uhmlx"
    assert args.output is None
    assert args.no_ast is False
