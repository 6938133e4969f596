import pytest

from bisaya.parser import parse_program
from bisaya.printer import format_expression, format_program

from conftest import EXAMPLES


@pytest.mark.parametrize('path', sorted(EXAMPLES.glob('*.bpp')), ids=lambda p: p.name)
def test_formatted_program_parses_to_same_tree(path):
    with open(path, 'r', encoding='utf-8') as f:
        program = parse_program(f.read())
    assert parse_program(format_program(program)) == program


def test_canonical_layout(example_source):
    program = parse_program(example_source('program_4.bpp'))
    assert format_program(program) == (
        "SUGOD\n"
        "    MUGNA NUMERO ctr\n"
        "    ALANG SA (ctr = 1, (ctr <= 3), ctr++) PUNDOK{\n"
        "        IPAKITA: ctr\n"
        "    }\n"
        "    IPAKITA: 'after: ' & ctr\n"
        "KATAPUSAN\n"
    )


@pytest.mark.parametrize('source, expected', [
    ('a + b * c', '(a + (b * c))'),
    ('DILI (a < b) O c', '(DILI (a < b) O c)'),
    ('- -a', '-(-a)'),
    ('"OO"', '"OO"'),
    ('\'OO\'', "'OO'"),
])
def test_expression_layout(source, expected):
    [stmt] = parse_program(f"SUGOD\nx = {source}\nKATAPUSAN").body
    assert format_expression(stmt.value) == expected


def test_conditional_chain_round_trips():
    source = (
        "SUGOD\n"
        "MUGNA NUMERO n = 2\n"
        "KUNG (n == 1) PUNDOK{ IPAKITA: 'one' }\n"
        "KUNG DILI (n == 2) PUNDOK{ IPAKITA: 'two' }\n"
        "KUNG WALA PUNDOK{ n-- }\n"
        "KATAPUSAN"
    )
    program = parse_program(source)
    text = format_program(program)
    assert "    KUNG DILI ((n == 2)) PUNDOK{\n" in text
    assert "    KUNG WALA PUNDOK{\n        n--\n    }\n" in text
    assert parse_program(text) == program


@pytest.mark.parametrize('statements, expected_line', [
    ("MUGNA TIPIK f = 0.00001", "    MUGNA TIPIK f = 0.00001"),
    ("MUGNA TIPIK f = -12345678901234567890.0", "    MUGNA TIPIK f = -12345678901234567000.0"),
    ("MUGNA TIPIK f = 1.5\nf = 0.00001 * 2.0", "    f = (0.00001 * 2.0)"),
    ("MUGNA TIPIK f = 1.5\nf = 12345678901234567890.0 + f", "    f = (12345678901234567000.0 + f)"),
])
def test_floats_are_printed_positionally(statements, expected_line):
    program = parse_program(f"SUGOD\n{statements}\nKATAPUSAN")
    text = format_program(program)
    assert expected_line in text.splitlines()
    assert parse_program(text) == program
