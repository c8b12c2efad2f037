from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from pdfsum.constants import Processors
from pdfsum.env import (
    gemini_api_key,
    gemini_model,
    llama_path,
    llm_processor,
    openai_api_base_url,
    openai_api_key,
    openai_model,
)
from pdfsum.logs import get_logger

from .errors import ConfigurationError

log = get_logger(__name__)


class LLMSelector:
    @staticmethod
    def get_processor() -> Processors:
        try:
            return Processors(llm_processor)
        except ValueError:
            raise ConfigurationError(f'Unsupported LLM_PROCESSOR {llm_processor}')

    @staticmethod
    def get_model_name(processor: Processors | None = None) -> str:
        processor = processor or LLMSelector.get_processor()

        if processor == Processors.GEMINI:
            return gemini_model
        elif processor == Processors.OPENAI:
            return openai_model

        return llama_path

    @staticmethod
    def select(temperature: float = 0) -> BaseChatModel:
        processor = LLMSelector.get_processor()
        model_name = LLMSelector.get_model_name(processor)

        if processor == Processors.GEMINI:
            if not gemini_api_key:
                raise ConfigurationError('GEMINI_API_KEY is missing')

            log.info(f'Forwarding inference to Gemini using {model_name}')

            return ChatGoogleGenerativeAI(
                google_api_key=gemini_api_key,
                max_retries=0,
                model=model_name,
                temperature=temperature,
            )
        elif processor == Processors.OPENAI:
            if not openai_api_key:
                raise ConfigurationError('OPENAI_API_KEY is missing')

            log.info(f'Forwarding inference to OpenAI using {model_name}')

            return ChatOpenAI(
                api_key=openai_api_key,
                max_retries=0,
                model=model_name,
                temperature=temperature,
            )
        else:
            log.info(f'Forwarding inference to local LLM using {model_name}')

            return ChatOpenAI(
                api_key='placeholder',  # use a placeholder value to bypass validation
                base_url=f'{openai_api_base_url}/v1',
                max_retries=0,
                model=model_name,
                temperature=temperature,
            )


__all__ = ['LLMSelector']
