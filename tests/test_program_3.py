from pathlib import Path
from nusa.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_strings(capsys):
    source = (EXAMPLES / 'program_3.nusa').read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['Halo, Nusa!', 'tab:\tend']
