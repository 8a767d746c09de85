import logging
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

# 창 테스트는 화면 없이 돌린다
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


@pytest.fixture(autouse=True)
def _detach_calculator_logger():
    yield
    logger = logging.getLogger('calculator')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
