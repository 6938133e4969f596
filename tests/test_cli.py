import builtins
import shutil

import pytest

from bisaya.__main__ import ConsoleInput, main
from bisaya.errors import BisayaError

from conftest import EXAMPLES


def test_runs_program_file(capsys):
    main([str(EXAMPLES / 'program_1.bpp')])
    assert capsys.readouterr().out == "4OO5\nc#last\n"


def test_format_mode(capsys):
    main(['--format', str(EXAMPLES / 'program_3.bpp')])
    out = capsys.readouterr().out
    assert out.startswith("SUGOD\n    MUGNA NUMERO a = 100, b = 200, c = 300\n")
    assert out.endswith("KATAPUSAN\n")


def test_emit_and_run_ast(tmp_path, capsys):
    program_file = tmp_path / 'program_4.bpp'
    shutil.copy(EXAMPLES / 'program_4.bpp', program_file)
    main(['--emit-ast', str(program_file)])
    ast_file = tmp_path / 'program_4.bpp.ast.json'
    assert capsys.readouterr().out.strip() == str(ast_file)
    assert ast_file.exists()
    main(['--ast', str(ast_file)])
    assert capsys.readouterr().out == "1\n2\n3\nafter: 4\n"


def test_console_input_is_split_on_commas(monkeypatch, capsys):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': "2.5, 4")
    main([str(EXAMPLES / 'program_7.bpp')])
    assert capsys.readouterr().out == "total: 10.0\nhalf: 5.0\n"


def test_console_input_reads_more_lines():
    lines = iter(['1, 2', '3'])
    read = ConsoleInput(lambda: next(lines))
    assert [read('a'), read('b'), read('c')] == ['1', '2', '3']


def test_console_input_end_of_file():
    def closed():
        raise EOFError
    with pytest.raises(BisayaError) as exc:
        ConsoleInput(closed)('x')
    assert exc.value.err.name == 'InputError'


def test_runtime_error_exits(tmp_path, capsys):
    program_file = tmp_path / 'bad.bpp'
    program_file.write_text("SUGOD\nIPAKITA: 'ok'\nIPAKITA: missing\nKATAPUSAN\n", encoding='utf-8')
    with pytest.raises(SystemExit) as exc:
        main([str(program_file)])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == "ok\n"
    assert captured.err.startswith("Runtime error: ReferenceError")


def test_syntax_error_exits(tmp_path, capsys):
    program_file = tmp_path / 'bad.bpp'
    program_file.write_text("SUGOD\nIPAKITA 'ok'\nKATAPUSAN\n", encoding='utf-8')
    with pytest.raises(SystemExit) as exc:
        main([str(program_file)])
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error: SyntaxError at 2:")


def test_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / 'nope.bpp')])
    assert exc.value.code == 1


def test_console_input_prompts_on_stderr(capsys):
    lines = iter(['1, 2', '3'])
    read = ConsoleInput(lambda: next(lines))
    assert [read('a'), read('b'), read('c')] == ['1', '2', '3']
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err == "Enter value for a: Enter value for c: "
