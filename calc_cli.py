#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
import argparse
import logging

from calc_events import dispatch, parse_keys
from calculator import AngleMode, Calculator, CalculatorState
from engineering_calculator import EngineeringCalculator


def setup_logger(log_path=None, level='INFO'):
    """콘솔과(경로가 있으면) 파일(UTF-8)로 동시에 로그를 남기는 로거를 설정한다."""
    logger = logging.getLogger('calculator')
    if logger.handlers:
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)s %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 콘솔(결과 출력과 섞이지 않도록 stderr)
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(formatter)
    logger.addHandler(sh)

    # 파일(UTF-8)
    if log_path:
        fh = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        fh.setLevel(level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def make_engine(basic=False, angle='DEG'):
    if basic:
        return Calculator()
    return EngineeringCalculator(CalculatorState(angle_mode=AngleMode(angle)))


def run_keys(keys, basic=False, angle='DEG'):
    """
    키 문자열을 처음부터 끝까지 엔진에 흘려 넣고 최종 화면 상태를 돌려준다.
    예: run_keys('5+2*3=').display_text == '21'
    """
    engine = make_engine(basic, angle)
    for event in parse_keys(keys):
        dispatch(engine, event)
    return engine.view()


def launch_gui(basic=False, angle='DEG'):
    # Qt 는 창을 띄울 때만 불러온다
    from PyQt5.QtWidgets import QApplication
    from calculator_window import create_window

    app = QApplication(sys.argv[:1])
    window = create_window(basic=basic, angle_mode=AngleMode(angle))
    window.show()
    return app.exec()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='공학용 계산기. --keys 를 주면 창 없이 입력을 계산해 결과만 출력합니다.'
    )
    parser.add_argument('--basic', action='store_true',
                        help='사칙연산 계산기로 실행')
    parser.add_argument('--angle', choices=[m.value for m in AngleMode], default='DEG',
                        help='시작 각도 단위(기본값: DEG)')
    parser.add_argument('--keys', default=None,
                        help="창 없이 계산할 키 입력, 예: '5+2*3=' 또는 '9{neg}{sqrt}'")
    parser.add_argument('--log', default=None,
                        help='로그 파일 경로(기본값: 파일 로그 없음)')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='로그 레벨(기본값: WARNING)')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logger = setup_logger(args.log, args.log_level)

    if args.keys is None:
        logger.info('[시작] %s 계산기 창', 'basic' if args.basic else 'scientific')
        return launch_gui(basic=args.basic, angle=args.angle)

    try:
        view = run_keys(args.keys, basic=args.basic, angle=args.angle)
    except (ValueError, TypeError) as e:
        logger.error('[입력 오류] %s', e)
        return 2

    print(view.display_text)
    return 1 if view.is_error else 0


if __name__ == '__main__':
    sys.exit(main())
