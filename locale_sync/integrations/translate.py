"""locale-sync – Translation Gateway.

Thin boundary around the external machine-translation service (AWS Translate).
Provider failures never escape: the gateway logs them and returns a
greppable sentinel so that a single bad call cannot abort a sync run.

Usage:
    gateway = TranslationGateway.from_settings(settings)
    gateway.translate("Hello", "en", "it")   # → "Ciao" or "[Hello]TO_BE_TRANSLATED"
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import boto3
import structlog

from config.settings import Settings

logger = structlog.get_logger()

SENTINEL_SUFFIX = "TO_BE_TRANSLATED"


def sentinel_for(text: str) -> str:
    """Marker written in place of a translation that could not be produced."""
    return f"[{text}]{SENTINEL_SUFFIX}"


class TranslationProvider(Protocol):
    """Anything that can translate one string. May raise on failure."""

    def translate_text(self, text: str, source_lang: str, target_lang: str) -> str:
        ...


class AwsTranslateProvider:
    """AWS Translate provider (TranslateText API).

    The boto3 client is created on first use. Missing region or credentials
    therefore fail each call instead of failing construction.
    """

    def __init__(
        self,
        region: str = "",
        access_key_id: str = "",
        secret_access_key: str = "",
        session_token: str = "",
        client: Any = None,
    ) -> None:
        self._region = region
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._session_token = session_token
        self._client = client
        self._client_lock = threading.Lock()

    def _get_client(self) -> Any:
        with self._client_lock:
            if self._client is None:
                self._client = boto3.client(
                    "translate",
                    region_name=self._region or None,
                    aws_access_key_id=self._access_key_id or None,
                    aws_secret_access_key=self._secret_access_key or None,
                    aws_session_token=self._session_token or None,
                )
            return self._client

    def translate_text(self, text: str, source_lang: str, target_lang: str) -> str:
        response = self._get_client().translate_text(
            Text=text,
            SourceLanguageCode=source_lang,
            TargetLanguageCode=target_lang,
        )
        return response["TranslatedText"]


@dataclass
class TranslationStats:
    """Counters for one gateway lifetime."""
    translated: int = 0
    failed: int = 0


class TranslationGateway:
    """Translate strings, degrading every provider failure to a sentinel."""

    def __init__(self, provider: TranslationProvider) -> None:
        self._provider = provider
        self._stats = TranslationStats()
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "TranslationGateway":
        if not settings.aws_region or not settings.has_aws_credentials:
            logger.warning(
                "translate.credentials_incomplete",
                region_set=bool(settings.aws_region),
                credentials_set=settings.has_aws_credentials,
            )
        provider = AwsTranslateProvider(
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            session_token=settings.aws_session_token,
        )
        return cls(provider)

    @property
    def stats(self) -> TranslationStats:
        with self._lock:
            return TranslationStats(self._stats.translated, self._stats.failed)

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate ``text`` from ``source_lang`` to ``target_lang``.

        Never raises. On provider failure returns ``sentinel_for(text)``.
        Empty text is never sent to the provider (AWS rejects it); it is
        marked with the sentinel so it shows up for review.
        """
        if not text:
            logger.warning("translate.empty_text", source_lang=source_lang, target_lang=target_lang)
            with self._lock:
                self._stats.failed += 1
            return sentinel_for(text)

        translated: Optional[str] = None
        try:
            translated = self._provider.translate_text(text, source_lang, target_lang)
        except Exception as e:
            logger.error(
                "translate.failed",
                text=text,
                source_lang=source_lang,
                target_lang=target_lang,
                error=str(e),
            )

        with self._lock:
            if translated is None:
                self._stats.failed += 1
            else:
                self._stats.translated += 1

        if translated is None:
            return sentinel_for(text)
        logger.debug("translate.ok", source_lang=source_lang, target_lang=target_lang)
        return translated
