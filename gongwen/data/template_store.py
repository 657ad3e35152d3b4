"""自定义模板存储（YAML文件）."""

from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from loguru import logger

from gongwen.config.settings import settings
from gongwen.data.models import WritingMode


class TemplateStore:
    """按写作模式保存自定义模板文本."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else settings.template_store

    def _load_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error(f"读取自定义模板失败: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"自定义模板文件格式不正确: {self.path}")
            return {}
        return {str(key): str(value) for key, value in data.items() if value is not None}

    def load(self, mode: WritingMode) -> str:
        """读取指定模式的自定义模板，不存在时返回空字符串."""
        return self._load_all().get(mode.value, "")

    def save(self, mode: WritingMode, text: str) -> None:
        """保存指定模式的自定义模板."""
        data = self._load_all()
        data[mode.value] = text
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=True), encoding="utf-8")
        logger.info(f"已保存{mode.value}自定义模板: {self.path}")
