"""
Direct REST translation engines (Azure, Google, Yandex, DeepL, ModernMT)

All vendors share one engine class. What differs per vendor (URLs, auth
headers, request body, where the translation sits in the JSON answer) lives
in a RestProvider descriptor.
"""
import html
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import httpx
from loguru import logger

from ..engine import MTEngine
from ..errors import MalformedResponseError, TransportError
from ..match import MTMatch
from ..transport import request_json
from ..xml_utils import copy_space, element_content, new_target, plain_text, to_xml_element

SOURCE = "source"
TARGET = "target"


@dataclass(frozen=True)
class Credentials:
    """API key plus vendor options"""
    api_key: str
    region: Optional[str] = None
    neural: bool = True


@dataclass(frozen=True)
class RestRequest:
    """A single vendor HTTP request"""
    method: str
    url: str
    params: Optional[Dict[str, Any]] = None
    headers: Optional[Dict[str, str]] = None
    json: Any = None


@dataclass(frozen=True)
class RestProvider:
    """
    Vendor descriptor for RestEngine.

    build_request receives (credentials, text, source_lang, target_lang, markup)
    where markup is True when text carries inline XML. Language lists come
    either from a static table of "src-tgt" directions or from an API call
    built by build_languages_request(credentials, kind).
    """
    name: str
    short_name: str
    handles_tags: bool
    build_request: Callable[[Credentials, str, str, str, bool], RestRequest]
    extract_translation: Callable[[Any], str]
    build_languages_request: Optional[Callable[[Credentials, str], RestRequest]] = None
    extract_languages: Optional[Callable[[Any], List[str]]] = None
    directions: Tuple[str, ...] = field(default_factory=tuple)


class RestEngine(MTEngine):
    """Translation engine for vendors with a plain JSON REST API"""

    def __init__(
        self,
        provider: RestProvider,
        api_key: str,
        region: Optional[str] = None,
        neural: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__()
        self.provider = provider
        self.name = provider.name
        self.short_name = provider.short_name
        self.credentials = Credentials(api_key=api_key, region=region, neural=neural)
        self._transport = transport

    def handles_tags(self) -> bool:
        return self.provider.handles_tags

    async def get_source_languages(self) -> List[str]:
        return await self._get_languages(SOURCE)

    async def get_target_languages(self) -> List[str]:
        return await self._get_languages(TARGET)

    async def translate(self, text: str) -> str:
        return await self._translate_text(text, markup=False)

    async def get_mt_match(
        self,
        source: ET.Element,
        terms: Optional[Sequence[Dict[str, str]]] = None
    ) -> MTMatch:
        if self.handles_tags():
            translation = await self._translate_text(element_content(source), markup=True)
            target = to_xml_element(f"<target>{translation}</target>")
        else:
            translation = await self._translate_text(plain_text(source), markup=False)
            target = new_target(translation)
        return MTMatch(source=source, target=copy_space(source, target), origin=self.short_name)

    async def _translate_text(self, text: str, markup: bool) -> str:
        self._require_languages()
        request = self.provider.build_request(self.credentials, text, self.src_lang, self.tgt_lang, markup)
        data = await self._send(request)
        try:
            return self.provider.extract_translation(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(f"{self.short_name} response has no translation: {data!r}")
            raise MalformedResponseError(f"Unexpected {self.short_name} response: {e}") from e

    async def _get_languages(self, kind: str) -> List[str]:
        if self.provider.directions:
            index = 0 if kind == SOURCE else 1
            return sorted({pair.split("-")[index] for pair in self.provider.directions})

        request = self.provider.build_languages_request(self.credentials, kind)
        data = await self._send(request)
        try:
            return self.provider.extract_languages(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise MalformedResponseError(f"Unexpected {self.short_name} languages response: {e}") from e

    async def _send(self, request: RestRequest) -> Any:
        return await request_json(
            request.method,
            request.url,
            params=request.params,
            headers=request.headers,
            json=request.json,
            transport=self._transport,
        )


# ---------------------------------------------------------------- Azure

AZURE_URL = "https://api.cognitive.microsofttranslator.com"


def _azure_request(credentials: Credentials, text: str, source_lang: str, target_lang: str, markup: bool) -> RestRequest:
    headers = {
        "Ocp-Apim-Subscription-Key": credentials.api_key,
        "Content-Type": "application/json; charset=UTF-8",
    }
    if credentials.region:
        headers["Ocp-Apim-Subscription-Region"] = credentials.region
    return RestRequest(
        method="POST",
        url=f"{AZURE_URL}/translate",
        params={"api-version": "3.0", "from": source_lang, "to": target_lang},
        headers=headers,
        json=[{"Text": text}],
    )


def _azure_languages_request(credentials: Credentials, kind: str) -> RestRequest:
    return RestRequest(
        method="GET",
        url=f"{AZURE_URL}/languages",
        params={"api-version": "3.0", "scope": "translation"},
    )


AZURE = RestProvider(
    name="Azure Translator Text",
    short_name="Azure",
    handles_tags=False,
    build_request=_azure_request,
    extract_translation=lambda data: data[0]["translations"][0]["text"],
    build_languages_request=_azure_languages_request,
    extract_languages=lambda data: list(data["translation"].keys()),
)


# ---------------------------------------------------------------- Google

GOOGLE_TRANSLATE_URL = "https://www.googleapis.com/language/translate/v2"
GOOGLE_LANGUAGES_URL = "https://translation.googleapis.com/language/translate/v2/languages"


def _google_model(credentials: Credentials) -> str:
    return "nmt" if credentials.neural else "base"


def _google_request(credentials: Credentials, text: str, source_lang: str, target_lang: str, markup: bool) -> RestRequest:
    return RestRequest(
        method="GET",
        url=GOOGLE_TRANSLATE_URL,
        params={
            "key": credentials.api_key,
            "q": text,
            "source": source_lang,
            "target": target_lang,
            "model": _google_model(credentials),
        },
    )


def _google_languages_request(credentials: Credentials, kind: str) -> RestRequest:
    return RestRequest(
        method="GET",
        url=GOOGLE_LANGUAGES_URL,
        params={"key": credentials.api_key, "model": _google_model(credentials)},
    )


GOOGLE = RestProvider(
    name="Google Cloud Translation",
    short_name="Google",
    handles_tags=False,
    build_request=_google_request,
    # Google returns HTML-escaped text (&#39; and friends)
    extract_translation=lambda data: html.unescape(data["data"]["translations"][0]["translatedText"]),
    build_languages_request=_google_languages_request,
    extract_languages=lambda data: [lang["language"] for lang in data["data"]["languages"]],
)


# ---------------------------------------------------------------- Yandex

YANDEX_URL = "https://translate.api.cloud.yandex.net/translate/v2/translate"

# Static because listing pairs through the API times out
YANDEX_DIRECTIONS = (
    "az-ru", "be-bg", "be-cs", "be-de", "be-en", "be-es", "be-fr", "be-it", "be-pl",
    "be-ro", "be-ru", "be-sr", "be-tr", "bg-be", "bg-ru", "bg-uk", "ca-en", "ca-ru", "cs-be", "cs-en", "cs-ru", "cs-uk",
    "da-en", "da-ru", "de-be", "de-en", "de-es", "de-fr", "de-it", "de-ru", "de-tr", "de-uk", "el-en", "el-ru", "en-be",
    "en-ca", "en-cs", "en-da", "en-de", "en-el", "en-es", "en-et", "en-fi", "en-fr", "en-hu", "en-it", "en-lt", "en-lv",
    "en-mk", "en-nl", "en-no", "en-pt", "en-ru", "en-sk", "en-sl", "en-sq", "en-sv", "en-tr", "en-uk", "es-be", "es-de",
    "es-en", "es-ru", "es-uk", "et-en", "et-ru", "fi-en", "fi-ru", "fr-be", "fr-de", "fr-en", "fr-ru", "fr-uk", "hr-ru",
    "hu-en", "hu-ru", "hy-ru", "it-be", "it-de", "it-en", "it-ru", "it-uk", "lt-en", "lt-ru", "lv-en", "lv-ru", "mk-en",
    "mk-ru", "nl-en", "nl-ru", "no-en", "no-ru", "pl-be", "pl-ru", "pl-uk", "pt-en", "pt-ru", "ro-be", "ro-ru", "ro-uk",
    "ru-az", "ru-be", "ru-bg", "ru-ca", "ru-cs", "ru-da", "ru-de", "ru-el", "ru-en", "ru-es", "ru-et", "ru-fi", "ru-fr",
    "ru-hr", "ru-hu", "ru-hy", "ru-it", "ru-lt", "ru-lv", "ru-mk", "ru-nl", "ru-no", "ru-pl", "ru-pt", "ru-ro", "ru-sk",
    "ru-sl", "ru-sq", "ru-sr", "ru-sv", "ru-tr", "ru-uk", "sk-en", "sk-ru", "sl-en", "sl-ru", "sq-en", "sq-ru", "sr-be",
    "sr-ru", "sr-uk", "sv-en", "sv-ru", "tr-be", "tr-de", "tr-en", "tr-ru", "tr-uk", "uk-bg", "uk-cs", "uk-de", "uk-en",
    "uk-es", "uk-fr", "uk-it", "uk-pl", "uk-ro", "uk-ru", "uk-sr", "uk-tr",
)


def _yandex_request(credentials: Credentials, text: str, source_lang: str, target_lang: str, markup: bool) -> RestRequest:
    return RestRequest(
        method="POST",
        url=YANDEX_URL,
        headers={
            "Authorization": f"Api-Key {credentials.api_key}",
            "Content-Type": "application/json",
        },
        json={
            "texts": [text],
            "targetLanguageCode": target_lang,
            "sourceLanguageCode": source_lang,
        },
    )


YANDEX = RestProvider(
    name="Yandex Translate API",
    short_name="Yandex",
    handles_tags=False,
    build_request=_yandex_request,
    extract_translation=lambda data: data["translations"][0]["text"],
    directions=YANDEX_DIRECTIONS,
)


# ---------------------------------------------------------------- DeepL

DEEPL_PRO_URL = "https://api.deepl.com/v2"
DEEPL_FREE_URL = "https://api-free.deepl.com/v2"


def _deepl_base_url(credentials: Credentials) -> str:
    # Free plan keys end with ":fx"
    return DEEPL_FREE_URL if credentials.api_key.endswith(":fx") else DEEPL_PRO_URL


def _deepl_headers(credentials: Credentials) -> Dict[str, str]:
    return {"Authorization": f"DeepL-Auth-Key {credentials.api_key}"}


def _deepl_request(credentials: Credentials, text: str, source_lang: str, target_lang: str, markup: bool) -> RestRequest:
    body: Dict[str, Any] = {
        "text": [text],
        "source_lang": source_lang,
        "target_lang": target_lang,
    }
    if markup:
        body["tag_handling"] = "xml"
    return RestRequest(
        method="POST",
        url=f"{_deepl_base_url(credentials)}/translate",
        headers=_deepl_headers(credentials),
        json=body,
    )


def _deepl_languages_request(credentials: Credentials, kind: str) -> RestRequest:
    return RestRequest(
        method="GET",
        url=f"{_deepl_base_url(credentials)}/languages",
        params={"type": kind},
        headers=_deepl_headers(credentials),
    )


DEEPL = RestProvider(
    name="DeepL API",
    short_name="DeepL",
    handles_tags=True,
    build_request=_deepl_request,
    extract_translation=lambda data: data["translations"][0]["text"],
    build_languages_request=_deepl_languages_request,
    extract_languages=lambda data: [lang["language"] for lang in data],
)


# ---------------------------------------------------------------- ModernMT

MODERNMT_URL = "https://api.modernmt.com/translate"


def _modernmt_payload(data: Any) -> Any:
    """Unwrap the ModernMT envelope, which reports errors with HTTP 200"""
    status = data.get("status")
    if status != 200:
        message = (data.get("error") or {}).get("message", "Unknown ModernMT error")
        raise TransportError(status, message)
    return data["data"]


def _modernmt_request(credentials: Credentials, text: str, source_lang: str, target_lang: str, markup: bool) -> RestRequest:
    return RestRequest(
        method="POST",
        url=MODERNMT_URL,
        headers={
            "MMT-ApiKey": credentials.api_key,
            "X-HTTP-Method-Override": "GET",
            "Content-Type": "application/json",
        },
        json={"source": source_lang, "target": target_lang, "q": text},
    )


def _modernmt_languages_request(credentials: Credentials, kind: str) -> RestRequest:
    return RestRequest(method="GET", url=f"{MODERNMT_URL}/languages")


MODERNMT = RestProvider(
    name="ModernMT",
    short_name="ModernMT",
    handles_tags=True,
    build_request=_modernmt_request,
    extract_translation=lambda data: _modernmt_payload(data)["translation"],
    build_languages_request=_modernmt_languages_request,
    extract_languages=lambda data: sorted(_modernmt_payload(data)),
)


REST_PROVIDERS: Dict[str, RestProvider] = {
    "azure": AZURE,
    "google": GOOGLE,
    "yandex": YANDEX,
    "deepl": DEEPL,
    "modernmt": MODERNMT,
}
