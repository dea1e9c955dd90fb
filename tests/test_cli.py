import json
from pathlib import Path

import pytest

from nusa.__main__ import main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def write(tmp_path, source, name='prog.nusa'):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return str(path)


def test_runs_program(capsys):
    main([str(EXAMPLES / 'program_2.nusa')])
    assert capsys.readouterr().out.split('\n')[:4] == ['9', '9', '3', '3.5']


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'absent.nusa')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


@pytest.mark.parametrize('source, stage', [
    ("let x = 1 % 2;", 'Lexing error'),
    ("let = 2;", 'Parse error'),
    ("print y;", 'Runtime error'),
])
def test_errors_report_stage(tmp_path, capsys, source, stage):
    with pytest.raises(SystemExit) as excinfo:
        main([write(tmp_path, source)])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith(stage)


def test_output_before_runtime_error_is_kept(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main([write(tmp_path, "print 'ok'; print 'a' - 'b';")])
    captured = capsys.readouterr()
    assert captured.out == 'ok\n'
    assert 'invalid operation for strings' in captured.err


def test_max_depth_flag(tmp_path, capsys):
    path = write(tmp_path, "func a() { b(); } func b() { print 'deep'; } a();")
    main(['--max-depth', '2', path])
    assert capsys.readouterr().out == 'deep\n'
    with pytest.raises(SystemExit):
        main(['--max-depth', '1', path])
    assert 'maximum call depth exceeded' in capsys.readouterr().err


def test_tokens_dump(tmp_path, capsys):
    main(['--tokens', write(tmp_path, "print 1;")])
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ["1:1\tPRINT\t'print'", "1:7\tNUMBER\t1.0", "1:8\tSEMICOLON\t';'"]


def test_emit_ast_then_run(tmp_path, capsys):
    path = write(tmp_path, "let x = 2; func f(a) { print a * x; } f(21);")
    main(['--emit-ast', path])
    out_path = Path(capsys.readouterr().out.strip())
    assert out_path == tmp_path / 'prog.nusa.ast.json'
    assert json.loads(out_path.read_text(encoding='utf-8'))['type'] == 'Program'
    main(['--ast', str(out_path)])
    assert capsys.readouterr().out == '42\n'


def test_invalid_ast_file(tmp_path, capsys):
    path = tmp_path / 'bad.ast.json'
    path.write_text('{"type": "Nope"}', encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(path)])
    assert excinfo.value.code == 1
    assert 'invalid AST file' in capsys.readouterr().err


def test_huge_max_depth_still_fails_cleanly(tmp_path, capsys):
    path = write(tmp_path, "func loop() { loop(); } loop();")
    with pytest.raises(SystemExit) as excinfo:
        main(['--max-depth', '100000', path])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith('Runtime error')
    assert 'maximum call depth exceeded' in err


def test_max_depth_must_be_positive(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(['--max-depth', '0', write(tmp_path, "print 1;")])
    assert excinfo.value.code == 2


def test_deep_parentheses_report_parse_error(tmp_path, capsys):
    path = write(tmp_path, "print " + "(" * 1500 + "1" + ")" * 1500 + ";")
    with pytest.raises(SystemExit) as excinfo:
        main([path])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith('Parse error: expression nesting too deep')


def test_invalid_utf8_source(tmp_path, capsys):
    path = tmp_path / 'bad.nusa'
    path.write_bytes(b"print '\xff\xfe';")
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    assert 'not valid UTF-8' in capsys.readouterr().err
