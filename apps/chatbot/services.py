import logging

import requests
from django.conf import settings

from .prompts import SYSTEM_PROMPTS

logger = logging.getLogger(__name__)

MAX_HISTORY_MESSAGES = 10


class ChatbotError(Exception):
    def __init__(self, message, status_code=500):
        super().__init__(message)
        self.status_code = status_code


class GroqClient:
    """Thin wrapper over Groq's OpenAI compatible chat completions endpoint"""

    def __init__(self, api_key=None, model=None, url=None):
        self.api_key = api_key or settings.GROQ_API_KEY
        self.model = model or settings.GROQ_MODEL
        self.url = url or settings.GROQ_API_URL

    def build_messages(self, message, history, user_type):
        system_prompt = SYSTEM_PROMPTS.get(user_type, SYSTEM_PROMPTS['customer'])
        messages = [{'role': 'system', 'content': system_prompt}]
        for entry in history[-MAX_HISTORY_MESSAGES:]:
            messages.append({'role': entry['role'], 'content': entry['content']})
        messages.append({'role': 'user', 'content': message})
        return messages

    def chat(self, message, history=(), user_type='customer'):
        payload = {
            'model': self.model,
            'messages': self.build_messages(message, list(history), user_type),
            'temperature': 0.7,
            'max_tokens': 1024,
            'top_p': 1,
        }
        headers = {
            'Authorization': f"Bearer {self.api_key}",
            'Content-Type': 'application/json',
        }

        try:
            response = requests.post(self.url, json=payload, headers=headers, timeout=30)
        except requests.exceptions.RequestException as e:
            logger.error("Groq request failed: %s", e)
            raise ChatbotError('Failed to process your message. Please try again.')

        if response.status_code == 429 or 'insufficient_quota' in response.text:
            logger.error("Groq quota exhausted: %s", response.text[:200])
            raise ChatbotError('AI service temporarily unavailable. Please try again later.', status_code=429)

        if response.status_code != 200:
            logger.error("Groq returned %s: %s", response.status_code, response.text[:200])
            raise ChatbotError('Failed to process your message. Please try again.')

        try:
            data = response.json()
            reply = data['choices'][0]['message']['content']
        except (ValueError, KeyError, IndexError) as e:
            logger.error("Unexpected Groq response: %s", e)
            raise ChatbotError('Failed to process your message. Please try again.')

        usage = data.get('usage', {})
        return {
            'message': reply,
            'usage': {
                'prompt_tokens': usage.get('prompt_tokens', 0),
                'completion_tokens': usage.get('completion_tokens', 0),
                'total_tokens': usage.get('total_tokens', 0),
            },
        }
