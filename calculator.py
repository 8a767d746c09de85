# calculator.py
# Python 3.x
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


logger = logging.getLogger('calculator')

OPERATOR_LABELS = {'+': '+', '-': '−', '*': '×', '/': '÷', '^': '^'}


class ErrorKind(Enum):
    """오류 분류와 화면에 보여줄 고정 메시지"""

    DIVISION_BY_ZERO = 'Cannot divide by 0'
    DOMAIN = 'Math domain error'
    OVERFLOW = 'Overflow'

    @property
    def message(self) -> str:
        return self.value


class AngleMode(Enum):
    DEG = 'DEG'
    RAD = 'RAD'


class CalculationError(Exception):
    """연산 실패. 엔진 내부에서만 던지고 이벤트 경계에서 오류 상태로 바뀐다."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.message)
        self.kind = kind


@dataclass
class CalculatorState:
    display: str = '0'  # 화면 문자열(입력 버퍼 겸 출력)
    accumulator: Optional[float] = None  # 이전 피연산자
    pending_operator: Optional[str] = None  # 대기 연산자: '+', '-', '*', '/', '^'
    last_operand: Optional[float] = None  # 반복 '='용 두 번째 피연산자
    overwrite: bool = False  # 다음 숫자 입력이 화면을 덮어쓰는지
    error: Optional[ErrorKind] = None
    angle_mode: AngleMode = AngleMode.DEG
    inverse: bool = False
    memory: Optional[float] = None
    history: str = ''  # '12 +' 형태의 미리보기
    entering_exponent: bool = False  # 'E' 직후 지수 입력 중


@dataclass(frozen=True)
class ViewModel:
    """화면(호스트)이 매 이벤트 후 읽어 가는 읽기 전용 투영"""

    display_text: str
    is_error: bool
    angle_mode: AngleMode
    inverse_active: bool
    has_memory: bool
    history_preview: str


def parse_number(text: str) -> float:
    # 잘못된 문자열('1E', '-', '')은 0으로 취급. '1E400' 같은 큰 지수는 inf 그대로
    try:
        return float(text.replace(',', '').strip())
    except ValueError:
        return 0.0


def _plain_text(x: float) -> str:
    # 가장 짧은 왕복 표현을 ECMAScript Number 문자열 규칙으로 배치
    if x == 0:
        return '0'
    sign = '-' if x < 0 else ''
    _, digit_tuple, exponent = Decimal(repr(abs(x))).normalize().as_tuple()
    digits = ''.join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # 소수점 위치

    if k <= n <= 21:
        body = digits + '0' * (n - k)
    elif 0 < n <= 21:
        body = digits[:n] + '.' + digits[n:]
    elif -6 < n <= 0:
        body = '0.' + '0' * (-n) + digits
    else:
        e = n - 1
        mantissa = digits[0] + ('.' + digits[1:] if k > 1 else '')
        body = '{}e{}'.format(mantissa, e)
    return sign + body


def format_number(x: float, max_len: int = 16, fixed_digits: int = 12,
                  exp_digits: int = 8) -> str:
    """
    실수를 길이 제한이 있는 표시 문자열로 바꾼다.
    - 기본 표현이 max_len 이내면 그대로
    - 아니면 소수 fixed_digits 자리로 반올림 후 다시 시도
    - 그래도 길면 유효 소수 exp_digits 자리 지수 표기('+' 없음)
    """
    if not math.isfinite(x):
        return 'Error'

    s = _plain_text(x)
    if len(s) <= max_len:
        return s

    s = _plain_text(float('{:.{}f}'.format(x, fixed_digits)))
    if len(s) <= max_len:
        return s

    mantissa, _, exponent = '{:.{}e}'.format(x, exp_digits).partition('e')
    return '{}e{}'.format(mantissa, int(exponent))


class Calculator:
    """연산 엔진: 상태와 사칙연산/부호/퍼센트/= 처리"""

    MAX_LEN = 14  # 디스플레이 자릿수 제한
    FIXED_DIGITS = 10
    EXP_DIGITS = 6
    OPERATORS = ('+', '-', '*', '/')

    def __init__(self, state: Optional[CalculatorState] = None) -> None:
        self.state = state if state is not None else CalculatorState()

    # 필수 API
    def add(self, a: float, b: float) -> float:
        return a + b

    def subtract(self, a: float, b: float) -> float:
        return a - b

    def multiply(self, a: float, b: float) -> float:
        return a * b

    def divide(self, a: float, b: float) -> float:
        if b == 0:
            raise CalculationError(ErrorKind.DIVISION_BY_ZERO)
        return a / b

    def evaluate(self, a: float, b: float, op: Optional[str]) -> float:
        if op == '+':
            return self.add(a, b)
        if op == '-':
            return self.subtract(a, b)
        if op == '*':
            return self.multiply(a, b)
        if op == '/':
            return self.divide(a, b)
        # 대기 연산자가 없으면 현재 값을 그대로
        return b

    def reset(self) -> None:
        self.state = CalculatorState()
        logger.info('[초기화] 계산기 상태를 기본값으로 되돌림')

    def input_digit(self, d: str) -> None:
        if len(d) != 1 or d not in '0123456789':
            raise ValueError('digit expected: {!r}'.format(d))
        s = self.state
        if s.error:
            return
        if s.overwrite:
            s.display = d
            s.overwrite = False
            s.entering_exponent = False
            return
        if s.display in ('0', '-0'):
            s.display = s.display[:-1] + d
        elif self._too_long_next(s.display):
            return
        else:
            s.display += d
        s.entering_exponent = False

    def input_dot(self) -> None:
        s = self.state
        if s.error:
            return
        if s.overwrite:
            s.display = '0.'
            s.overwrite = False
            s.entering_exponent = False
            return
        # 지수 표기 중이면 가수 부분에만 소수점 허용
        mantissa, marker, exponent = s.display.partition('E')
        if '.' in mantissa:
            return
        if self._too_long_next(s.display):
            return
        s.display = mantissa + '.' + marker + exponent

    def negative_positive(self) -> None:
        s = self.state
        if s.error:
            return
        if s.display.startswith('-'):
            s.display = s.display[1:]
        elif s.display != '0':
            s.display = '-' + s.display

    def backspace(self) -> None:
        s = self.state
        if s.error:
            return
        if s.overwrite:
            s.display = '0'
            return
        cur = s.display
        if len(cur) <= 1 or (len(cur) == 2 and cur.startswith('-')):
            s.display = '0'
        else:
            s.display = cur[:-1]
        s.entering_exponent = s.display.endswith(('E', 'E-'))

    def set_operator(self, op: str) -> None:
        """op in {'+','−','×','÷'} UI 기호를 내부 기호로 변환"""
        s = self.state
        if s.error:
            return
        internal = self._to_internal_op(op)
        label = OPERATOR_LABELS[internal]
        try:
            cur = self._current_value()
        except CalculationError as e:
            self._set_error(e.kind)
            return

        if s.accumulator is None:
            # 첫 연산자: 현재 입력을 축적
            s.accumulator = cur
            s.pending_operator = internal
            s.overwrite = True
            s.entering_exponent = False
            s.history = '{} {}'.format(self.format_value(cur), label)
            return

        if s.overwrite:
            # 연산자를 연달아 누르면 교체만 한다
            s.pending_operator = internal
            if s.history and s.history[-1] in OPERATOR_LABELS.values():
                s.history = s.history[:-1] + label
            else:
                s.history = '{} {}'.format(s.display, label)
            return

        try:
            result = self._commit(self.evaluate(s.accumulator, cur, s.pending_operator))
        except CalculationError as e:
            self._set_error(e.kind)
            return
        s.accumulator = result
        s.pending_operator = internal
        s.history = '{} {}'.format(s.display, label)

    def equal(self) -> None:
        s = self.state
        if s.error:
            return

        if s.pending_operator is None:
            if s.last_operand is None:
                return
            # 반복 '=': 직전 두 번째 피연산자를 더한다(원래 연산자와 무관)
            try:
                self._commit(self.add(self._current_value(), s.last_operand))
            except CalculationError as e:
                self._set_error(e.kind)
            return

        a = s.accumulator if s.accumulator is not None else 0.0
        try:
            cur = self._current_value()
            result = self._commit(self.evaluate(a, cur, s.pending_operator))
        except CalculationError as e:
            self._set_error(e.kind)
            return
        s.accumulator = result
        s.last_operand = cur
        s.pending_operator = None
        s.history = ''

    def percent(self) -> None:
        s = self.state
        if s.error:
            return
        try:
            self._commit(self._percent_value(self._current_value()))
        except CalculationError as e:
            self._set_error(e.kind)

    # 표시 문자열
    def display_text(self) -> str:
        s = self.state
        return s.error.message if s.error else s.display

    def format_value(self, x: float) -> str:
        return format_number(x, self.MAX_LEN, self.FIXED_DIGITS, self.EXP_DIGITS)

    def view(self) -> ViewModel:
        s = self.state
        return ViewModel(
            display_text=self.display_text(),
            is_error=s.error is not None,
            angle_mode=s.angle_mode,
            inverse_active=s.inverse,
            has_memory=s.memory is not None,
            history_preview=s.history,
        )

    # 내부 유틸
    def _current_value(self) -> float:
        # 화면 값. 유한하지 않으면(큰 지수 입력) 오버플로
        x = parse_number(self.state.display)
        if not math.isfinite(x):
            raise CalculationError(ErrorKind.OVERFLOW)
        return x

    def _percent_value(self, x: float) -> float:
        s = self.state
        if s.accumulator is not None and s.pending_operator is not None:
            # 이항 문맥: prev * (x/100)
            return s.accumulator * (x / 100)
        # 단항 문맥: x/100
        return x / 100

    def _commit(self, value: float) -> float:
        # 결과 확정: 화면 갱신 후 다음 입력은 덮어쓰기
        if not math.isfinite(value):
            raise CalculationError(ErrorKind.OVERFLOW)
        s = self.state
        s.display = self.format_value(value)
        s.overwrite = True
        s.entering_exponent = False
        return value

    def _to_internal_op(self, ui_op: str) -> str:
        mapping = {'+': '+', '−': '-', '×': '*', '÷': '/'}
        internal = mapping.get(ui_op, ui_op)
        if internal not in self.OPERATORS:
            raise ValueError('unsupported operator: {!r}'.format(ui_op))
        return internal

    def _too_long_next(self, s: str) -> bool:
        # 다음 입력이 자릿수 제한을 넘기는지 검사(부호 제외)
        return len(s.lstrip('-')) >= self.MAX_LEN

    def _set_error(self, kind: ErrorKind) -> None:
        s = self.state
        s.error = kind
        s.display = '0'
        s.accumulator = None
        s.pending_operator = None
        s.overwrite = True
        s.entering_exponent = False
        s.history = ''
        logger.info('[오류] %s', kind.message)
