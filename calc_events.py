# calc_events.py
# Python 3.x
# 입력 이벤트 정의, 이벤트 -> 엔진 메서드 연결, 키 입력 해석

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from calculator import CalculatorState
from engineering_calculator import EngineeringCalculator, UnaryFunction


logger = logging.getLogger('calculator')


@dataclass(frozen=True)
class Digit:
    digit: str


@dataclass(frozen=True)
class DecimalPoint:
    pass


@dataclass(frozen=True)
class ToggleSign:
    pass


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class ChooseOperator:
    op: str  # '+', '−', '×', '÷', '^' (또는 '-', '*', '/')


@dataclass(frozen=True)
class Equals:
    pass


@dataclass(frozen=True)
class Percent:
    pass


@dataclass(frozen=True)
class ApplyUnary:
    fn: UnaryFunction


@dataclass(frozen=True)
class InsertConstant:
    name: str  # 'PI' | 'E'


@dataclass(frozen=True)
class PressExponent:
    pass


@dataclass(frozen=True)
class ToggleAngleMode:
    pass


@dataclass(frozen=True)
class ToggleInverse:
    pass


@dataclass(frozen=True)
class MemClear:
    pass


@dataclass(frozen=True)
class MemRecall:
    pass


@dataclass(frozen=True)
class MemStore:
    pass


@dataclass(frozen=True)
class MemAdd:
    pass


@dataclass(frozen=True)
class MemSubtract:
    pass


# 이벤트 타입 -> (엔진 메서드 이름, 인자 추출)
_HANDLERS = {
    Digit: ('input_digit', lambda ev: (ev.digit,)),
    DecimalPoint: ('input_dot', lambda ev: ()),
    ToggleSign: ('negative_positive', lambda ev: ()),
    Backspace: ('backspace', lambda ev: ()),
    Clear: ('reset', lambda ev: ()),
    ChooseOperator: ('set_operator', lambda ev: (ev.op,)),
    Equals: ('equal', lambda ev: ()),
    Percent: ('percent', lambda ev: ()),
    ApplyUnary: ('apply_unary', lambda ev: (ev.fn,)),
    InsertConstant: ('insert_constant', lambda ev: (ev.name,)),
    PressExponent: ('press_exponent', lambda ev: ()),
    ToggleAngleMode: ('toggle_angle_mode', lambda ev: ()),
    ToggleInverse: ('toggle_inverse', lambda ev: ()),
    MemClear: ('memory_clear', lambda ev: ()),
    MemRecall: ('memory_recall', lambda ev: ()),
    MemStore: ('memory_store', lambda ev: ()),
    MemAdd: ('memory_add', lambda ev: ()),
    MemSubtract: ('memory_subtract', lambda ev: ()),
}


def dispatch(calc, event) -> None:
    """이벤트 하나를 엔진에 전달한다. 기본 계산기에 없는 기능이면 TypeError."""
    try:
        name, args = _HANDLERS[type(event)]
    except KeyError:
        raise TypeError('unknown event: {!r}'.format(event)) from None
    method = getattr(calc, name, None)
    if method is None:
        raise TypeError('{} does not support {}'.format(
            type(calc).__name__, type(event).__name__))
    logger.debug('[이벤트] %r', event)
    method(*args(event))


def apply_event(state: CalculatorState, event) -> CalculatorState:
    """상태 x 이벤트 -> 새 상태. 입력 상태는 건드리지 않는다."""
    calc = EngineeringCalculator(dataclasses.replace(state))
    dispatch(calc, event)
    return calc.state


def run_events(events: Iterable, state: Optional[CalculatorState] = None) -> CalculatorState:
    state = state if state is not None else CalculatorState()
    for event in events:
        state = apply_event(state, event)
    return state


_BASIC_KEYS = {
    '+': '+',
    '-': '−',
    '*': '×',
    '/': '÷',
}

_LETTER_KEYS = {
    'p': InsertConstant('PI'),
    'e': InsertConstant('E'),
    'r': ToggleAngleMode(),
    'i': ToggleInverse(),
    'l': ApplyUnary(UnaryFunction.LN),
    'g': ApplyUnary(UnaryFunction.LOG10),
}

_TRIG_KEYS = {
    's': (UnaryFunction.SIN, UnaryFunction.ASIN),
    'c': (UnaryFunction.COS, UnaryFunction.ACOS),
    't': (UnaryFunction.TAN, UnaryFunction.ATAN),
}


def key_to_event(key: str, inverse: bool = False):
    """키보드 키 이름을 이벤트로. 처리하지 않는 키는 None."""
    if len(key) == 1 and key in '0123456789':
        return Digit(key)
    if key == '.':
        return DecimalPoint()
    if key == 'Backspace':
        return Backspace()
    if key == 'Escape':
        return Clear()
    if key in ('Enter', '='):
        return Equals()
    if key == '!':
        return ApplyUnary(UnaryFunction.FACTORIAL)
    if key == '%':
        return Percent()
    if key == '^':
        return ChooseOperator('^')
    if key in _BASIC_KEYS:
        return ChooseOperator(_BASIC_KEYS[key])

    lower = key.lower()
    if len(key) == 1 and lower in _LETTER_KEYS:
        return _LETTER_KEYS[lower]
    if len(key) == 1 and lower in _TRIG_KEYS:
        plain, inv = _TRIG_KEYS[lower]
        return ApplyUnary(inv if inverse else plain)
    return None


# parse_keys 에서 {이름} 으로 쓰는 이벤트
NAMED_EVENTS = {
    'C': Clear(),
    'bs': Backspace(),
    'neg': ToggleSign(),
    'pi': InsertConstant('PI'),
    'e': InsertConstant('E'),
    'EE': PressExponent(),
    'angle': ToggleAngleMode(),
    'inv': ToggleInverse(),
    'MC': MemClear(),
    'MR': MemRecall(),
    'MS': MemStore(),
    'M+': MemAdd(),
    'M-': MemSubtract(),
}
NAMED_EVENTS.update({fn.value: ApplyUnary(fn) for fn in UnaryFunction})

_SYMBOL_KEYS = {
    '−': ChooseOperator('−'),
    '×': ChooseOperator('×'),
    '÷': ChooseOperator('÷'),
}


def parse_keys(text: str) -> List:
    """
    헤드리스 입력 문자열을 이벤트 목록으로 바꾼다.
    예: '5+2*3=', '9{neg}{sqrt}', '{pi}{sin}'
    공백은 무시, {이름}은 NAMED_EVENTS, 그 외 한 글자는 key_to_event 규칙을 따른다.
    """
    events = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch == '{':
            end = text.find('}', i)
            if end < 0:
                raise ValueError('unclosed {{ at position {}'.format(i))
            name = text[i + 1:end]
            if name not in NAMED_EVENTS:
                raise ValueError('unknown key name: {!r}'.format(name))
            events.append(NAMED_EVENTS[name])
            i = end + 1
            continue
        event = _SYMBOL_KEYS.get(ch) or key_to_event(ch)
        if event is None:
            raise ValueError('unknown key: {!r}'.format(ch))
        events.append(event)
        i += 1
    return events
