summary_pdf = (
    'Summarize the following PDF text in 5–8 brief points. '
    'Be factual and concise, paying attention to details. '
    'At the very beginning, describe what this file is about and what information it contains.'
)
