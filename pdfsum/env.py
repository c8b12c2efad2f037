import os


# utilities
def tobool(val: str | None):
    if val is None:
        return False
    val = val.lower().strip()
    if val in ['y', 'yes', 'true', '1']:
        return True
    return False


# general
app_port = int(os.environ.get('PDFSUM_PORT', 8000))
log_level = os.environ.get('LOG_LEVEL', 'DEBUG').strip().upper()
cors_origins = [origin.strip() for origin in os.environ.get('CORS_ORIGIN', '').split(',') if origin.strip()]

# summaries
llm_processor = os.environ.get('LLM_PROCESSOR', 'GEMINI').strip().upper()
summary_timeout_ms = int(os.environ.get('SUMMARY_TIMEOUT_MS', 15000))

# gemini
gemini_api_key = os.environ.get('GEMINI_API_KEY')
gemini_model = os.environ.get('GEMINI_MODEL', 'gemini-2.5-flash')

# openai
openai_api_key = os.environ.get('OPENAI_API_KEY')
openai_model = os.environ.get('OPENAI_MODEL', 'gpt-4o-mini')

# local openai compatible server (ollama / vllm)
llama_path = os.environ.get('LLAMA_PATH', 'llama3.1')
openai_api_base_url = os.environ.get('OPENAI_API_BASE_URL', 'http://localhost:11434')

# monitoring
enable_metrics = tobool(os.environ.get('ENABLE_METRICS', 'true'))
metrics_port = int(os.environ.get('METRICS_PORT', 8001))
