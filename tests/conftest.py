"""测试公共夹具."""

import pytest


class TickingClock:
    """每次调用前进固定秒数的时钟."""

    def __init__(self, step: float = 1.0, start: float = 0.0):
        self.step = step
        self.now = start

    def __call__(self) -> float:
        self.now += self.step
        return self.now


@pytest.fixture
def ticking_clock():
    return TickingClock()


@pytest.fixture
def complete_gov_text():
    """要素齐全、无占位符的公文."""
    return "\n".join([
        "〔沈师办发〔2024〕12号〕",
        "关于召开年度总结会议的通知",
        "各学院、各部门：",
        "为做好年度总结工作，经研究，决定召开年度总结会议。",
        "一、会议时间",
        "2024年12月20日下午2点。",
        "",
        "沈阳师范大学",
        "2024年12月10日",
    ])
