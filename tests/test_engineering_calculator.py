import math

import pytest

from calculator import AngleMode, CalculatorState, ErrorKind
from engineering_calculator import (
    INVERSE_FUNCTIONS,
    UNARY_TABLE,
    EngineeringCalculator,
    UnaryFunction,
    inverse_of,
)


@pytest.fixture
def calc():
    return EngineeringCalculator()


def enter(calc, text):
    """숫자 문자열 입력('-'로 시작하면 마지막에 부호 전환)"""
    negative = text.startswith('-')
    for ch in text.lstrip('-'):
        if ch == '.':
            calc.input_dot()
        else:
            calc.input_digit(ch)
    if negative:
        calc.negative_positive()


def unary(calc, text, fn):
    enter(calc, text)
    calc.apply_unary(fn)
    return calc.view()


def test_unary_table_covers_every_function():
    assert set(UNARY_TABLE) == set(UnaryFunction)


def test_inverse_pairs():
    assert inverse_of(UnaryFunction.SIN) is UnaryFunction.ASIN
    assert inverse_of(UnaryFunction.LN) is UnaryFunction.EXP
    assert inverse_of(UnaryFunction.LOG10) is UnaryFunction.EXP10
    assert inverse_of(UnaryFunction.SQRT) is UnaryFunction.SQRT
    assert len(INVERSE_FUNCTIONS) == 5


def test_display_limit_is_sixteen(calc):
    enter(calc, '1' * 17)
    assert calc.display_text() == '1' * 16


@pytest.mark.parametrize('text, fn, expected', [
    ('12', UnaryFunction.SQUARE, '144'),
    ('3', UnaryFunction.CUBE, '27'),
    ('16', UnaryFunction.SQRT, '4'),
    ('-8', UnaryFunction.CBRT, '-2'),
    ('4', UnaryFunction.RECIPROCAL, '0.25'),
    ('-3', UnaryFunction.ABS, '3'),
    ('50', UnaryFunction.PERCENT, '0.5'),
    ('5', UnaryFunction.FACTORIAL, '120'),
    ('0', UnaryFunction.FACTORIAL, '1'),
    ('0', UnaryFunction.EXP, '1'),
    ('3', UnaryFunction.EXP10, '1000'),
    ('1', UnaryFunction.LN, '0'),
    ('1000', UnaryFunction.LOG10, '3'),
    ('30', UnaryFunction.SIN, '0.5'),
    ('90', UnaryFunction.COS, '0'),
    ('45', UnaryFunction.TAN, '1'),
    ('1', UnaryFunction.ASIN, '90'),
    ('0.5', UnaryFunction.ACOS, '60'),
    ('1', UnaryFunction.ATAN, '45'),
])
def test_unary_functions_in_degrees(calc, text, fn, expected):
    view = unary(calc, text, fn)
    assert not view.is_error
    assert view.display_text == expected
    assert calc.state.overwrite


@pytest.mark.parametrize('text, fn, kind', [
    ('-9', UnaryFunction.SQRT, ErrorKind.DOMAIN),
    ('0', UnaryFunction.RECIPROCAL, ErrorKind.DIVISION_BY_ZERO),
    ('-1', UnaryFunction.FACTORIAL, ErrorKind.DOMAIN),
    ('2.5', UnaryFunction.FACTORIAL, ErrorKind.DOMAIN),
    ('171', UnaryFunction.FACTORIAL, ErrorKind.OVERFLOW),
    ('1000', UnaryFunction.EXP, ErrorKind.OVERFLOW),
    ('400', UnaryFunction.EXP10, ErrorKind.OVERFLOW),
    ('0', UnaryFunction.LN, ErrorKind.DOMAIN),
    ('-5', UnaryFunction.LOG10, ErrorKind.DOMAIN),
    ('2', UnaryFunction.ASIN, ErrorKind.DOMAIN),
    ('-1.5', UnaryFunction.ACOS, ErrorKind.DOMAIN),
])
def test_unary_failures(calc, text, fn, kind):
    view = unary(calc, text, fn)
    assert view.is_error
    assert calc.state.error is kind
    assert view.display_text == kind.message
    assert calc.state.display == '0'


def test_factorial_upper_bound_is_formatted(calc):
    view = unary(calc, '170', UnaryFunction.FACTORIAL)
    assert view.display_text == '7.25741562e306'


def test_square_root_of_negative_message(calc):
    calc.input_digit('9')
    calc.negative_positive()
    calc.apply_unary('sqrt')
    assert calc.view().display_text == 'Math domain error'


def test_unary_accepts_function_names(calc):
    enter(calc, '4')
    calc.apply_unary('recip')
    assert calc.display_text() == '0.25'


def test_unknown_unary_name_rejected(calc):
    with pytest.raises(ValueError):
        calc.apply_unary('sinh')


def test_radian_mode(calc):
    calc.toggle_angle_mode()
    assert calc.state.angle_mode is AngleMode.RAD
    calc.insert_constant('PI')
    calc.apply_unary(UnaryFunction.SIN)
    assert calc.display_text() == '0'
    calc.insert_constant('PI')
    calc.apply_unary(UnaryFunction.COS)
    assert calc.display_text() == '-1'
    enter(calc, '1')
    calc.apply_unary(UnaryFunction.ASIN)
    assert calc.display_text() == '1.570796326795'


def test_percent_of_pending_accumulator(calc):
    enter(calc, '200')
    calc.set_operator('+')
    enter(calc, '10')
    calc.apply_unary(UnaryFunction.PERCENT)
    assert calc.display_text() == '20'


def test_unary_result_then_digit_overwrites(calc):
    unary(calc, '16', UnaryFunction.SQRT)
    calc.input_digit('7')
    assert calc.display_text() == '7'


def test_unary_inside_chain_keeps_pending_operator(calc):
    enter(calc, '2')
    calc.set_operator('+')
    enter(calc, '9')
    calc.apply_unary(UnaryFunction.SQRT)
    calc.equal()
    assert calc.display_text() == '5'


@pytest.mark.parametrize('a, op, b, expected', [
    ('2', '^', '10', '1024'),
    ('9', '^', '0.5', '3'),
    ('2', '^', '-1', '0.5'),
    ('7', '÷', '2', '3.5'),
    ('3', '−', '5', '-2'),
])
def test_binary_operators(calc, a, op, b, expected):
    enter(calc, a)
    calc.set_operator(op)
    enter(calc, b)
    calc.equal()
    assert calc.display_text() == expected


@pytest.mark.parametrize('a, b', [('10', '400'), ('-8', '0.5'), ('0', '-1')])
def test_power_failures_are_overflow(calc, a, b):
    enter(calc, a)
    calc.set_operator('^')
    enter(calc, b)
    calc.equal()
    assert calc.state.error is ErrorKind.OVERFLOW
    assert calc.view().display_text == 'Overflow'


def test_product_overflow_is_reported(calc):
    calc.press_exponent()
    for d in '308':
        calc.input_digit(d)
    assert calc.display_text() == '1E308'
    calc.set_operator('×')
    enter(calc, '10')
    calc.equal()
    assert calc.state.error is ErrorKind.OVERFLOW


def test_exponent_entry(calc):
    enter(calc, '2')
    calc.press_exponent()
    assert calc.display_text() == '2E'
    assert calc.state.entering_exponent
    calc.negative_positive()
    assert calc.display_text() == '2E-'
    calc.input_digit('3')
    assert calc.display_text() == '2E-3'
    assert not calc.state.entering_exponent
    calc.set_operator('+')
    enter(calc, '1')
    calc.equal()
    assert calc.display_text() == '1.002'


def test_exponent_seeds_one_on_zero_and_after_commit(calc):
    calc.press_exponent()
    assert calc.display_text() == '1E'
    calc.press_exponent()
    assert calc.display_text() == '1E'
    calc.input_digit('2')
    calc.equal()
    calc.apply_unary(UnaryFunction.ABS)
    calc.press_exponent()
    assert calc.display_text() == '1E'
    assert not calc.state.overwrite


def test_exponent_sign_toggles_back(calc):
    calc.press_exponent()
    calc.negative_positive()
    calc.negative_positive()
    assert calc.display_text() == '1E'


def test_backspace_reenters_exponent(calc):
    calc.press_exponent()
    calc.input_digit('5')
    calc.backspace()
    assert calc.display_text() == '1E'
    assert calc.state.entering_exponent
    calc.backspace()
    assert calc.display_text() == '1'
    assert not calc.state.entering_exponent


def test_decimal_goes_into_mantissa(calc):
    enter(calc, '1.5')
    calc.press_exponent()
    calc.input_dot()
    assert calc.display_text() == '1.5E'


def test_constants(calc):
    calc.insert_constant('PI')
    assert calc.display_text() == '3.14159265359'
    assert calc.state.overwrite
    calc.insert_constant('E')
    assert calc.display_text() == '2.718281828459'
    with pytest.raises(ValueError):
        calc.insert_constant('TAU')


def test_constant_keeps_pending_chain(calc):
    enter(calc, '2')
    calc.set_operator('×')
    calc.insert_constant('PI')
    calc.equal()
    assert calc.display_text() == format(2 * math.pi, '.12f').rstrip('0')


def test_memory_registers(calc):
    calc.memory_recall()
    assert calc.display_text() == '0'
    enter(calc, '5')
    calc.memory_store()
    assert calc.view().has_memory
    enter(calc, '3')
    calc.memory_add()
    assert calc.state.memory == 58
    calc.memory_recall()
    assert calc.display_text() == '58'
    calc.input_digit('1')
    assert calc.display_text() == '1'
    calc.memory_subtract()
    assert calc.state.memory == 57
    calc.memory_clear()
    assert not calc.view().has_memory


def test_memory_add_on_empty_register(calc):
    enter(calc, '7')
    calc.memory_subtract()
    assert calc.state.memory == -7


def test_toggles(calc):
    calc.toggle_inverse()
    assert calc.view().inverse_active
    assert calc.resolve_unary(UnaryFunction.COS) is UnaryFunction.ACOS
    calc.toggle_inverse()
    assert calc.resolve_unary(UnaryFunction.COS) is UnaryFunction.COS
    calc.toggle_angle_mode()
    calc.toggle_angle_mode()
    assert calc.view().angle_mode is AngleMode.DEG
    assert calc.display_text() == '0'


def test_error_freezes_memory_and_toggles(calc):
    enter(calc, '4')
    calc.memory_store()
    calc.set_operator('÷')
    enter(calc, '0')
    calc.equal()
    calc.memory_add()
    calc.memory_clear()
    calc.toggle_angle_mode()
    calc.toggle_inverse()
    calc.insert_constant('PI')
    calc.press_exponent()
    assert calc.state.memory == 4
    assert calc.state.angle_mode is AngleMode.DEG
    assert not calc.state.inverse
    assert calc.view().display_text == 'Cannot divide by 0'


def test_reset_restores_every_default(calc):
    enter(calc, '4')
    calc.memory_store()
    calc.toggle_angle_mode()
    calc.toggle_inverse()
    calc.set_operator('^')
    calc.reset()
    assert calc.state == CalculatorState()


def test_history_for_power(calc):
    enter(calc, '2')
    calc.set_operator('^')
    assert calc.view().history_preview == '2 ^'
    calc.set_operator('÷')
    assert calc.view().history_preview == '2 ÷'


def test_square_overflow(calc):
    calc.press_exponent()
    for d in '200':
        calc.input_digit(d)
    calc.apply_unary(UnaryFunction.SQUARE)
    assert calc.state.error is ErrorKind.OVERFLOW


def test_memory_round_trip_keeps_exponent_text(calc):
    view = unary(calc, '170', UnaryFunction.FACTORIAL)
    calc.memory_store()
    calc.memory_recall()
    assert calc.display_text() == view.display_text == '7.25741562e306'


def type_huge_exponent(calc):
    calc.press_exponent()
    for d in '400':
        calc.input_digit(d)
    assert calc.display_text() == '1E400'


def test_huge_typed_exponent_overflows_in_chain(calc):
    type_huge_exponent(calc)
    calc.set_operator('+')
    assert calc.state.error is ErrorKind.OVERFLOW


def test_huge_typed_exponent_overflows_as_second_operand(calc):
    enter(calc, '2')
    calc.set_operator('×')
    type_huge_exponent(calc)
    calc.equal()
    assert calc.view().display_text == 'Overflow'


@pytest.mark.parametrize('op', ['memory_store', 'memory_add', 'memory_subtract'])
def test_huge_typed_exponent_overflows_in_memory(calc, op):
    type_huge_exponent(calc)
    getattr(calc, op)()
    assert calc.state.error is ErrorKind.OVERFLOW
    assert calc.state.memory is None


def test_huge_typed_exponent_overflows_in_unary(calc):
    type_huge_exponent(calc)
    calc.apply_unary(UnaryFunction.ABS)
    assert calc.state.error is ErrorKind.OVERFLOW
