"""chatmt: traducción vía servicios chat-completion compatibles con OpenAI."""
