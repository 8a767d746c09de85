# engineering_calculator.py
# Python 3.x
# 표준 라이브러리만 사용, PEP 8 준수, 문자열은 기본 ' ' 사용

import logging
import math  # 삼각/상수/각도 변환 [표준 모듈]
from enum import Enum

from calculator import (
    AngleMode,
    CalculationError,
    Calculator,
    ErrorKind,
)


logger = logging.getLogger('calculator')

CONSTANTS = {'PI': math.pi, 'E': math.e}
FACTORIAL_LIMIT = 170  # 171! 은 double 범위를 넘는다


class UnaryFunction(Enum):
    SQUARE = 'square'
    CUBE = 'cube'
    SQRT = 'sqrt'
    CBRT = 'cbrt'
    RECIPROCAL = 'recip'
    ABS = 'abs'
    PERCENT = 'percent'
    FACTORIAL = 'fact'
    EXP = 'exp'
    EXP10 = 'exp10'
    LN = 'ln'
    LOG10 = 'log10'
    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    ASIN = 'asin'
    ACOS = 'acos'
    ATAN = 'atan'


# INV 토글 시 대응 함수
INVERSE_FUNCTIONS = {
    UnaryFunction.SIN: UnaryFunction.ASIN,
    UnaryFunction.COS: UnaryFunction.ACOS,
    UnaryFunction.TAN: UnaryFunction.ATAN,
    UnaryFunction.LN: UnaryFunction.EXP,
    UnaryFunction.LOG10: UnaryFunction.EXP10,
}


def inverse_of(fn: UnaryFunction) -> UnaryFunction:
    return INVERSE_FUNCTIONS.get(fn, fn)


def _sqrt(calc: 'EngineeringCalculator', x: float) -> float:
    if x < 0:
        raise CalculationError(ErrorKind.DOMAIN)
    return math.sqrt(x)


def _reciprocal(calc: 'EngineeringCalculator', x: float) -> float:
    if x == 0:
        raise CalculationError(ErrorKind.DIVISION_BY_ZERO)
    return 1 / x


def _factorial(calc: 'EngineeringCalculator', x: float) -> float:
    if x < 0 or not x.is_integer():
        raise CalculationError(ErrorKind.DOMAIN)
    if x > FACTORIAL_LIMIT:
        raise CalculationError(ErrorKind.OVERFLOW)
    return float(math.factorial(int(x)))


def _exp(calc: 'EngineeringCalculator', x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        raise CalculationError(ErrorKind.OVERFLOW)


def _exp10(calc: 'EngineeringCalculator', x: float) -> float:
    try:
        return math.pow(10, x)
    except OverflowError:
        raise CalculationError(ErrorKind.OVERFLOW)


def _ln(calc: 'EngineeringCalculator', x: float) -> float:
    if x <= 0:
        raise CalculationError(ErrorKind.DOMAIN)
    return math.log(x)


def _log10(calc: 'EngineeringCalculator', x: float) -> float:
    if x <= 0:
        raise CalculationError(ErrorKind.DOMAIN)
    return math.log10(x)


def _tan(calc: 'EngineeringCalculator', x: float) -> float:
    y = math.tan(calc._to_radians_if_needed(x))
    if not math.isfinite(y):
        raise CalculationError(ErrorKind.DOMAIN)
    return y


def _asin(calc: 'EngineeringCalculator', x: float) -> float:
    if x < -1 or x > 1:
        raise CalculationError(ErrorKind.DOMAIN)
    return calc._from_radians_if_needed(math.asin(x))


def _acos(calc: 'EngineeringCalculator', x: float) -> float:
    if x < -1 or x > 1:
        raise CalculationError(ErrorKind.DOMAIN)
    return calc._from_radians_if_needed(math.acos(x))


# 함수 식별자 -> 구현. UnaryFunction 전부를 빠짐없이 덮는다.
UNARY_TABLE = {
    UnaryFunction.SQUARE: lambda calc, x: x * x,
    UnaryFunction.CUBE: lambda calc, x: x * x * x,
    UnaryFunction.SQRT: _sqrt,
    UnaryFunction.CBRT: lambda calc, x: math.cbrt(x),
    UnaryFunction.RECIPROCAL: _reciprocal,
    UnaryFunction.ABS: lambda calc, x: abs(x),
    UnaryFunction.PERCENT: lambda calc, x: calc._percent_value(x),
    UnaryFunction.FACTORIAL: _factorial,
    UnaryFunction.EXP: _exp,
    UnaryFunction.EXP10: _exp10,
    UnaryFunction.LN: _ln,
    UnaryFunction.LOG10: _log10,
    UnaryFunction.SIN: lambda calc, x: math.sin(calc._to_radians_if_needed(x)),
    UnaryFunction.COS: lambda calc, x: math.cos(calc._to_radians_if_needed(x)),
    UnaryFunction.TAN: _tan,
    UnaryFunction.ASIN: _asin,
    UnaryFunction.ACOS: _acos,
    UnaryFunction.ATAN: lambda calc, x: calc._from_radians_if_needed(math.atan(x)),
}


class EngineeringCalculator(Calculator):
    """공학 기능 확장: 거듭제곱/단항 함수/상수/지수 입력/각도 단위/INV/메모리"""

    MAX_LEN = 16
    FIXED_DIGITS = 12
    EXP_DIGITS = 8
    OPERATORS = ('+', '-', '*', '/', '^')

    def power(self, a: float, b: float) -> float:
        # 음수의 비정수 거듭제곱, 0의 음수 거듭제곱도 유한하지 않은 결과로 본다
        try:
            out = math.pow(a, b)
        except (OverflowError, ValueError):
            raise CalculationError(ErrorKind.OVERFLOW)
        if not math.isfinite(out):
            raise CalculationError(ErrorKind.OVERFLOW)
        return out

    def evaluate(self, a: float, b: float, op) -> float:
        if op == '^':
            return self.power(a, b)
        return super().evaluate(a, b, op)

    def negative_positive(self) -> None:
        s = self.state
        if s.error:
            return
        # 'E' 직후면 지수 부호를 붙이거나 뗀다
        if s.entering_exponent and s.display.endswith('E'):
            s.display += '-'
            return
        if s.entering_exponent and s.display.endswith('E-'):
            s.display = s.display[:-1]
            return
        super().negative_positive()

    # 각도 단위 제어
    def toggle_angle_mode(self) -> None:
        s = self.state
        if s.error:
            return
        s.angle_mode = AngleMode.RAD if s.angle_mode is AngleMode.DEG else AngleMode.DEG

    def toggle_inverse(self) -> None:
        s = self.state
        if s.error:
            return
        s.inverse = not s.inverse

    def resolve_unary(self, fn: UnaryFunction) -> UnaryFunction:
        """버튼의 기본 함수를 INV 상태에 맞는 함수로 바꾼다."""
        return inverse_of(fn) if self.state.inverse else fn

    def apply_unary(self, fn) -> None:
        s = self.state
        if s.error:
            return
        fn = UnaryFunction(fn)
        try:
            self._commit(UNARY_TABLE[fn](self, self._current_value()))
        except CalculationError as e:
            self._set_error(e.kind)

    def insert_constant(self, name: str) -> None:
        if name not in CONSTANTS:
            raise ValueError('unknown constant: {!r}'.format(name))
        s = self.state
        if s.error:
            return
        self._commit(CONSTANTS[name])

    def press_exponent(self) -> None:
        s = self.state
        if s.error or 'E' in s.display:
            return
        if s.overwrite or s.display == '0':
            s.display = '1E'
            s.overwrite = False
        elif self._too_long_next(s.display):
            return
        else:
            s.display += 'E'
        s.entering_exponent = True

    # 메모리
    def memory_clear(self) -> None:
        s = self.state
        if s.error:
            return
        s.memory = None

    def memory_recall(self) -> None:
        s = self.state
        if s.error or s.memory is None:
            return
        try:
            self._commit(s.memory)
        except CalculationError as e:
            self._set_error(e.kind)

    def memory_store(self) -> None:
        s = self.state
        if s.error:
            return
        try:
            s.memory = self._current_value()
        except CalculationError as e:
            self._set_error(e.kind)

    def memory_add(self) -> None:
        s = self.state
        if s.error:
            return
        try:
            s.memory = (s.memory or 0.0) + self._current_value()
        except CalculationError as e:
            self._set_error(e.kind)

    def memory_subtract(self) -> None:
        s = self.state
        if s.error:
            return
        try:
            s.memory = (s.memory or 0.0) - self._current_value()
        except CalculationError as e:
            self._set_error(e.kind)

    def _to_radians_if_needed(self, x: float) -> float:
        return math.radians(x) if self.state.angle_mode is AngleMode.DEG else x

    def _from_radians_if_needed(self, x: float) -> float:
        return math.degrees(x) if self.state.angle_mode is AngleMode.DEG else x
