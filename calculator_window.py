# calculator_window.py
# Python 3.x, PyQt5
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from calc_events import (
    ApplyUnary,
    Backspace,
    ChooseOperator,
    Clear,
    DecimalPoint,
    Digit,
    Equals,
    InsertConstant,
    MemAdd,
    MemClear,
    MemRecall,
    MemStore,
    MemSubtract,
    Percent,
    PressExponent,
    ToggleAngleMode,
    ToggleInverse,
    ToggleSign,
    dispatch,
    key_to_event,
)
from calculator import AngleMode, Calculator
from engineering_calculator import EngineeringCalculator, UnaryFunction


# Qt 특수 키 -> key_to_event 키 이름
_QT_KEYS = {
    Qt.Key_Backspace: 'Backspace',
    Qt.Key_Escape: 'Escape',
    Qt.Key_Return: 'Enter',
    Qt.Key_Enter: 'Enter',
}

# 버튼 라벨 -> 이벤트 (숫자는 on_button 에서 처리)
BASIC_BUTTONS = {
    'C': Clear(),
    '⌫': Backspace(),
    '±': ToggleSign(),
    '.': DecimalPoint(),
    '=': Equals(),
    '+': ChooseOperator('+'),
    '−': ChooseOperator('−'),
    '×': ChooseOperator('×'),
    '÷': ChooseOperator('÷'),
    '%': Percent(),
}

SCIENTIFIC_BUTTONS = {
    **BASIC_BUTTONS,
    'xʸ': ChooseOperator('^'),
    'x²': ApplyUnary(UnaryFunction.SQUARE),
    'x³': ApplyUnary(UnaryFunction.CUBE),
    '√': ApplyUnary(UnaryFunction.SQRT),
    '∛': ApplyUnary(UnaryFunction.CBRT),
    '1/x': ApplyUnary(UnaryFunction.RECIPROCAL),
    'x!': ApplyUnary(UnaryFunction.FACTORIAL),
    '|x|': ApplyUnary(UnaryFunction.ABS),
    '%': ApplyUnary(UnaryFunction.PERCENT),
    'π': InsertConstant('PI'),
    'e': InsertConstant('E'),
    'Exp': PressExponent(),
    'INV': ToggleInverse(),
    'MC': MemClear(),
    'MR': MemRecall(),
    'M+': MemAdd(),
    'M−': MemSubtract(),
    'MS': MemStore(),
}

# INV 에 따라 바뀌는 버튼: 라벨 -> 기본 함수
INVERTIBLE_BUTTONS = {
    'sin': UnaryFunction.SIN,
    'cos': UnaryFunction.COS,
    'tan': UnaryFunction.TAN,
    'ln': UnaryFunction.LN,
    'log': UnaryFunction.LOG10,
}

INVERSE_LABELS = {
    'sin': 'sin⁻¹',
    'cos': 'cos⁻¹',
    'tan': 'tan⁻¹',
    'ln': 'eˣ',
    'log': '10ˣ',
}


class CalculatorWindow(QWidget):
    """PyQt5 UI: 버튼 → Calculator 엔진 연결"""

    TITLE = 'Calculator'
    ROWS = [
        ['C', '⌫', '%', '÷'],
        ['7', '8', '9', '×'],
        ['4', '5', '6', '−'],
        ['1', '2', '3', '+'],
        ['±', '0', '.', '='],
    ]
    BUTTONS = BASIC_BUTTONS

    def __init__(self, engine=None) -> None:
        super().__init__()
        self.engine = engine if engine is not None else self._make_engine()
        self.buttons = {}
        self._build_ui()
        self.refresh()

    def _make_engine(self):
        return Calculator()

    def _build_ui(self) -> None:
        self.setWindowTitle(self.TITLE)
        root = QVBoxLayout()
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(8)
        self.setLayout(root)

        self._build_header(root)

        self.display = QLineEdit()
        self.display.setReadOnly(True)
        self.display.setAlignment(Qt.AlignRight)
        self.display.setFocusPolicy(Qt.NoFocus)
        font = QFont(self.display.font())
        font.setPointSize(28)
        self.display.setFont(font)
        root.addWidget(self.display)

        grid = QGridLayout()
        grid.setSpacing(6)
        root.addLayout(grid)

        for r, row in enumerate(self.ROWS):
            # 마지막 줄은 '0'이 두 칸을 차지한다
            wide_zero = len(row) < len(self.ROWS[0])
            for c, label in enumerate(row):
                if not label:
                    continue
                btn = self._make_button(label)
                if label == '0' and wide_zero:
                    grid.addWidget(btn, r, c, 1, 2)
                elif wide_zero:
                    grid.addWidget(btn, r, c + 1)
                else:
                    grid.addWidget(btn, r, c)

        self._build_footer(root)
        self.resize(360, 520)

    def _build_header(self, root) -> None:
        pass

    def _build_footer(self, root) -> None:
        pass

    def _make_button(self, label: str) -> QPushButton:
        btn = QPushButton(label)
        btn.setMinimumHeight(56)
        btn.setCursor(Qt.PointingHandCursor)
        btn.setFocusPolicy(Qt.NoFocus)
        # clicked는 checked(bool) 인자를 내보내므로 첫 인자를 흡수하도록 작성
        btn.clicked.connect(lambda checked=False, ch=label: self.on_button(ch))
        self.buttons[label] = btn
        return btn

    def event_for(self, label: str):
        if label.isdigit():
            return Digit(label)
        return self.BUTTONS.get(label)

    def on_button(self, label: str) -> None:
        event = self.event_for(label)
        if event is None:
            return
        dispatch(self.engine, event)
        self.refresh()

    def keyPressEvent(self, e) -> None:
        key = _QT_KEYS.get(e.key(), e.text())
        event = key_to_event(key, inverse=self.engine.state.inverse)
        if event is None or not self._supports(event):
            super().keyPressEvent(e)
            return
        dispatch(self.engine, event)
        self.refresh()

    def _supports(self, event) -> bool:
        return event in self.BUTTONS.values() or isinstance(event, Digit)

    def refresh(self) -> None:
        self.display.setText(self.engine.view().display_text)


class EngineeringCalculatorWindow(CalculatorWindow):
    """공학용 계산기 UI: 버튼 → EngineeringCalculator 매핑"""

    TITLE = 'Scientific Calculator'
    ROWS = [
        ['sin', 'cos', 'tan', 'ln', 'log'],
        ['x²', 'x³', '√', '∛', '1/x'],
        ['x!', '|x|', 'π', 'e', '%'],
        ['Exp', 'C', '⌫', '±', '÷'],
        ['7', '8', '9', 'xʸ', '×'],
        ['4', '5', '6', '', '−'],
        ['1', '2', '3', '', '+'],
        ['0', '.', '='],
    ]
    BUTTONS = SCIENTIFIC_BUTTONS

    def _make_engine(self):
        return EngineeringCalculator()

    def _build_ui(self) -> None:
        super()._build_ui()
        self.resize(480, 680)

    def _build_header(self, root) -> None:
        bar = QHBoxLayout()
        self.angle_button = QPushButton()
        self.angle_button.setFocusPolicy(Qt.NoFocus)
        self.angle_button.clicked.connect(lambda checked=False: self.on_toggle_angle())
        bar.addWidget(self.angle_button)

        inv = self._make_button('INV')
        inv.setCheckable(True)
        inv.setMinimumHeight(0)
        bar.addWidget(inv)
        bar.addStretch(1)

        for label in ('MC', 'MR', 'M+', 'M−', 'MS'):
            btn = self._make_button(label)
            btn.setMinimumHeight(0)
            bar.addWidget(btn)
        root.addLayout(bar)

        self.history_label = QLabel()
        self.history_label.setAlignment(Qt.AlignRight)
        root.addWidget(self.history_label)

    def _build_footer(self, root) -> None:
        self.memory_label = QLabel()
        self.memory_label.setAlignment(Qt.AlignRight)
        root.addWidget(self.memory_label)

    def event_for(self, label: str):
        if label in INVERTIBLE_BUTTONS:
            return ApplyUnary(self.engine.resolve_unary(INVERTIBLE_BUTTONS[label]))
        return super().event_for(label)

    def on_toggle_angle(self) -> None:
        dispatch(self.engine, ToggleAngleMode())
        self.refresh()

    def _supports(self, event) -> bool:
        return True

    def refresh(self) -> None:
        view = self.engine.view()
        self.display.setText(view.display_text)
        self.history_label.setText(view.history_preview)
        self.memory_label.setText('M' if view.has_memory else '')
        self.angle_button.setText(view.angle_mode.value)
        self.buttons['INV'].setChecked(view.inverse_active)
        for label in INVERTIBLE_BUTTONS:
            self.buttons[label].setText(INVERSE_LABELS[label] if view.inverse_active else label)


def create_window(basic: bool = False, angle_mode: AngleMode = AngleMode.DEG) -> CalculatorWindow:
    if basic:
        return CalculatorWindow()
    window = EngineeringCalculatorWindow()
    if angle_mode is not window.engine.state.angle_mode:
        window.on_toggle_angle()
    return window
