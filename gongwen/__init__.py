"""公文与论文写作助手：结构识别、预检、排版导出与版本管理."""

# 导入日志配置，确保其在最早被加载
from gongwen.utils.logger import setup_logger

# 初始化日志配置
setup_logger()

__version__ = "0.1.0"
