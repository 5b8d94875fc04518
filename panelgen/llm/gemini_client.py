import logging
from google import genai
from panelgen.core.config import settings
from panelgen.schemas.panel_schema import PanelLLMResponse

logger = logging.getLogger(__name__)


class GeminiClient:
    def __init__(self, model_name="gemini-2.5-flash"):
        self.client = genai.Client(api_key=settings.GEMINI_KEY)
        self.model_name = model_name

    async def generate(self, prompt: dict) -> PanelLLMResponse | None:
        """ Generates panel (structured output)"""
        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=prompt["user_prompt"],
            config={
                "system_instruction": prompt["system_prompt"],
                "response_mime_type": "application/json",
                "response_schema": PanelLLMResponse,
            },
        )
        logger.debug("Raw JSON:\n%s", response.text)

        if response.usage_metadata:
            logger.info("Gemini token usage: total %s", response.usage_metadata.total_token_count)

        return response.parsed
