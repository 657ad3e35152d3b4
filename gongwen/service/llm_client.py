"""大模型客户端服务."""

from typing import Optional

from loguru import logger
from openai import OpenAI

from gongwen.config.settings import settings


class LLMClient:
    """大模型客户端.

    负责与大模型API的基础通信，不包含特定业务逻辑。
    """

    def __init__(self) -> None:
        """初始化大模型客户端."""
        self.api_key = settings.llm.api_key
        if not self.api_key:
            logger.warning("未设置API密钥，请在环境变量或配置中设置DEEPSEEK_API_KEY")

        self.api_base_url = settings.llm.api_base_url
        self._client: Optional[OpenAI] = None

        # 模型设置
        self.model_name = settings.llm.model_name
        self.max_tokens = settings.llm.max_tokens
        self.temperature = settings.llm.temperature
        self.timeout = settings.llm.timeout

        logger.info(f"大模型客户端已初始化，使用模型: {self.model_name}, API基础URL: {self.api_base_url}")

    @property
    def client(self) -> OpenAI:
        """首次调用时创建OpenAI客户端."""
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("缺少环境变量 DEEPSEEK_API_KEY")
            client_kwargs = {"api_key": self.api_key}
            if self.api_base_url:
                client_kwargs["base_url"] = self.api_base_url
            self._client = OpenAI(**client_kwargs)
        return self._client

    def chat_completion(
        self,
        user_message: str,
        system_message: str = "你是一个有帮助的AI助手。",
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[int] = None
    ) -> str:
        """发送聊天请求到大模型.

        Args:
            user_message: 用户消息
            system_message: 系统消息
            temperature: 温度参数，控制生成的随机性
            max_tokens: 最大生成token数
            timeout: 超时时间(秒)

        Returns:
            大模型返回的文本

        Raises:
            Exception: 请求失败
        """
        try:
            logger.debug(f"发送聊天请求到LLM: {user_message[:200]}...")

            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=[
                    {"role": "system", "content": system_message},
                    {"role": "user", "content": user_message},
                ],
                max_tokens=max_tokens or self.max_tokens,
                temperature=temperature if temperature is not None else self.temperature,
                timeout=timeout or self.timeout,
            )

            # 提取生成的文本
            if not response.choices:
                logger.warning("大模型未返回有效选项")
                return ""

            result = (response.choices[0].message.content or "").strip()
            logger.info(f"大模型返回: {result[:200]}...")

            return result
        except Exception as e:
            logger.error(f"大模型请求失败: {e}")
            # 向上层抛出异常，让调用者决定如何处理
            raise
