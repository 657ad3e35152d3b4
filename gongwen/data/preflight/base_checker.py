"""预检检查器基类."""

from abc import ABC, abstractmethod
from typing import List

from gongwen.data.models import PreflightIssue


class PreflightChecker(ABC):
    """预检检查器基类."""

    @abstractmethod
    def check(self, text: str) -> List[PreflightIssue]:
        """检查文档文本.

        Args:
            text: 文档文本

        Returns:
            预检问题列表
        """
        pass
