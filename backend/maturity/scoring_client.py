from __future__ import annotations
import json
import re
import httpx
from typing import Any, Dict, List, Optional
from .settings import settings


class ScoringServiceError(RuntimeError):
	"""The chat completions endpoint could not be reached or answered badly."""


class ModelOutputError(ValueError):
	"""The model reply did not contain a JSON object."""


class ScoringClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		timeout: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.api_key = api_key or settings.openai_api_key
		if not self.api_key:
			raise ValueError("OPENAI_API_KEY is not configured")
		self.model = model or settings.openai_model
		self.base_url = base_url or settings.openai_base_url
		self._client = httpx.AsyncClient(
			timeout=timeout or settings.openai_timeout_seconds,
			transport=transport,
		)

	async def complete_json(self, system_prompt: str, user_content: str) -> str:
		"""Ask for a JSON object reply and return the raw message text."""
		payload: Dict[str, Any] = {
			"model": self.model,
			"response_format": {"type": "json_object"},
			"messages": [
				{"role": "system", "content": system_prompt},
				{"role": "user", "content": user_content},
			],
		}
		headers = {
			"Authorization": f"Bearer {self.api_key}",
			"Content-Type": "application/json",
		}
		try:
			r = await self._client.post(self.base_url, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			raise ScoringServiceError(
				f"Scoring service returned HTTP {http_err.response.status_code}"
			) from http_err
		except httpx.RequestError as net_err:
			raise ScoringServiceError(f"Scoring service unreachable: {net_err}") from net_err
		try:
			data = r.json()
			choices: List[Dict[str, Any]] = data["choices"]
			content = (choices[0].get("message") or {}).get("content")
		except (ValueError, KeyError, IndexError, TypeError, AttributeError) as err:
			raise ScoringServiceError(f"Unexpected scoring response: {r.text[:500]}") from err
		return content or "{}"

	async def aclose(self) -> None:
		await self._client.aclose()


def parse_model_json(text: str) -> Dict[str, Any]:
	"""Pull a JSON object out of a model reply.

	Tries the whole text, then a fenced ```json block, then the outermost
	``{...}`` span.
	"""
	candidates = [text]
	code_block = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text)
	if code_block:
		candidates.append(code_block.group(1))
	first = text.find("{")
	last = text.rfind("}")
	if first != -1 and last > first:
		candidates.append(text[first : last + 1])
	for candidate in candidates:
		try:
			data = json.loads(candidate)
		except ValueError:
			continue
		if isinstance(data, dict):
			return data
	raise ModelOutputError("Model reply is not a JSON object")


def get_scoring_client_factory():
	# Overridden in tests; the client itself is built per request
	return ScoringClient
