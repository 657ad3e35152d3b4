"""编辑历史与版本管理.

- HistoryStack: 撤销/还原栈，短时间内的连续写入合并为一步
- VersionList: 生成时记录的版本，不合并、不自动清理
- EditingSession: 单个写作模式的文档文本、历史与版本
- SessionManager: 按写作模式隔离的会话，切换模式不互相影响
"""

import time
from datetime import datetime
from typing import Callable, Dict, List, Optional

from loguru import logger

from gongwen.config.settings import settings
from gongwen.data.models import VersionEntry, WritingMode


class HistoryStack:
    """撤销/还原历史."""

    def __init__(self, clock: Callable[[], float] = time.monotonic, coalesce_ms: Optional[int] = None):
        """初始化历史栈.

        Args:
            clock: 时钟函数（秒），测试时可注入
            coalesce_ms: 合并时间窗口（毫秒），默认取配置
        """
        self.clock = clock
        self.coalesce_seconds = (coalesce_ms if coalesce_ms is not None else settings.document.history_coalesce_ms) / 1000
        self.entries: List[str] = []
        self.index = -1
        self._last_write: Optional[float] = None

    @property
    def current(self) -> Optional[str]:
        return self.entries[self.index] if self.index >= 0 else None

    @property
    def can_undo(self) -> bool:
        return self.index > 0

    @property
    def can_redo(self) -> bool:
        return self.index < len(self.entries) - 1

    def push(self, text: str) -> bool:
        """写入一条历史.

        与上次写入间隔小于合并窗口时替换最近一条，达到或超过窗口时追加，并丢弃光标之后的记录。
        空白文本与相同文本不写入。

        Args:
            text: 文档文本

        Returns:
            是否写入
        """
        if not text.strip() or text == self.current:
            return False

        now = self.clock()
        should_append = self._last_write is None or now - self._last_write >= self.coalesce_seconds
        self._last_write = now

        base = self.entries[:self.index + 1]
        if should_append or not base:
            base.append(text)
        else:
            base[-1] = text
        self.entries = base
        self.index = len(self.entries) - 1
        return True

    def undo(self) -> Optional[str]:
        """后退一步，已在最早记录时不移动."""
        if self.can_undo:
            self.index -= 1
        return self.current

    def redo(self) -> Optional[str]:
        """前进一步，已在最新记录时不移动."""
        if self.can_redo:
            self.index += 1
        return self.current

    def __len__(self) -> int:
        return len(self.entries)


class VersionList:
    """版本记录."""

    def __init__(self, mode: WritingMode, now: Callable[[], datetime] = datetime.now):
        self.mode = mode
        self.now = now
        self.entries: List[VersionEntry] = []

    def push(self, content: str) -> VersionEntry:
        """追加一个版本."""
        moment = self.now()
        number = len(self.entries) + 1
        entry = VersionEntry(
            id=f"{self.mode.value}-{int(moment.timestamp() * 1000)}-{number}",
            label=f"版本 {number}",
            content=content,
            timestamp=f"{moment.year}/{moment.month}/{moment.day} {moment:%H:%M:%S}",
        )
        self.entries.append(entry)
        logger.info(f"已保存{entry.label}（{entry.timestamp}）")
        return entry

    def get(self, version_id: str) -> Optional[VersionEntry]:
        return next((entry for entry in self.entries if entry.id == version_id), None)

    def latest_first(self) -> List[VersionEntry]:
        return list(reversed(self.entries))

    def __len__(self) -> int:
        return len(self.entries)


class EditingSession:
    """单个写作模式的编辑会话."""

    def __init__(self, mode: WritingMode, clock: Callable[[], float] = time.monotonic):
        self.mode = mode
        self.content = ""
        self.history = HistoryStack(clock=clock)
        self.versions = VersionList(mode)

    def edit(self, text: str) -> None:
        """直接编辑：更新文本并写入历史."""
        self.content = text
        self.history.push(text)

    def commit_generation(self, text: str) -> VersionEntry:
        """生成完成：更新文本、写入历史并记录版本."""
        self.edit(text)
        return self.versions.push(text)

    def undo(self) -> Optional[str]:
        text = self.history.undo()
        if text is not None:
            self.content = text
        return text

    def redo(self) -> Optional[str]:
        text = self.history.redo()
        if text is not None:
            self.content = text
        return text

    def view_version(self, version_id: str) -> Optional[str]:
        """回看版本：版本内容成为当前文本，可撤销."""
        entry = self.versions.get(version_id)
        if entry is None:
            logger.warning(f"版本不存在: {version_id}")
            return None
        self.edit(entry.content)
        return entry.content


class SessionManager:
    """按写作模式隔离的会话集合."""

    def __init__(self, clock: Callable[[], float] = time.monotonic, mode: WritingMode = WritingMode.GOV):
        self.sessions: Dict[WritingMode, EditingSession] = {
            item: EditingSession(item, clock=clock) for item in WritingMode
        }
        self.mode = mode

    @property
    def active(self) -> EditingSession:
        return self.sessions[self.mode]

    def switch(self, mode: WritingMode) -> EditingSession:
        """切换写作模式，返回对应会话."""
        if mode != self.mode:
            logger.info(f"切换写作模式: {self.mode.value} -> {mode.value}")
        self.mode = mode
        return self.active
