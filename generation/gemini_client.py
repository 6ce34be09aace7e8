"""HTTP client for the Gemini generateContent endpoint"""

from typing import Optional
import httpx
import logging

from config.settings import GEMINI_API_URL, GEMINI_TIMEOUT, MAX_OUTPUT_TOKENS, TEMPERATURE, TOP_K, TOP_P
from generation.credentials import CredentialRotator
from generation.exceptions import CredentialsExhaustedError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def default_generation_config() -> dict:
    return {
        "temperature": TEMPERATURE,
        "topK": TOP_K,
        "topP": TOP_P,
        "maxOutputTokens": MAX_OUTPUT_TOKENS,
    }


class GeminiClient:
    """Sends prompts to the generation endpoint, rotating keys on failure"""

    def __init__(
        self,
        rotator: CredentialRotator,
        api_url: str = GEMINI_API_URL,
        generation_config: Optional[dict] = None,
        timeout: Optional[float] = GEMINI_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        self.rotator = rotator
        self.api_url = api_url
        self.generation_config = generation_config or default_generation_config()
        self.http_client = http_client or httpx.Client(timeout=timeout)

    def build_payload(self, prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": self.generation_config,
        }

    def generate_text(self, prompt: str) -> str:
        """
        Return the generated text for a prompt.

        Each attempt takes the next key from the pool. A non-2xx status, a
        transport error or a response without generated text moves on to the
        next key straight away; once every key in the pool has been tried the
        call fails.

        Raises:
            CredentialsExhaustedError: all keys failed for this prompt
        """
        payload = self.build_payload(prompt)
        attempts = len(self.rotator)

        for attempt in range(1, attempts + 1):
            api_key = self.rotator.next_key()
            try:
                response = self.http_client.post(self.api_url, params={"key": api_key}, json=payload)
            except httpx.HTTPError as e:
                logger.error(f"API key {attempt}/{attempts} error: {e.__class__.__name__}: {e}")
                continue

            if not response.is_success:
                logger.error(f"API key {attempt}/{attempts} failed ({response.status_code}): {response.text[:500]}")
                continue

            try:
                data = response.json()
                return data["candidates"][0]["content"]["parts"][0]["text"]
            except (ValueError, KeyError, IndexError, TypeError) as e:
                logger.error(f"API key {attempt}/{attempts} returned an unusable body: {e!r}")
                continue

        raise CredentialsExhaustedError("All API keys failed. Please check your Gemini API configuration.")

    def close(self):
        self.http_client.close()
