# File: typegen/messages.py
"""
NexaFlow TypeGen - Validation Message Catalog
==============================================
Read-only message tables shipped with the generator.

``DEFAULT_VALIDATION_MESSAGES``
    Per-locale templates emitted into ``i18n.ts`` (filtered to the
    configured locales, then overlaid with the user's messages).

``DEFAULT_VALIDATION_TEMPLATES``
    Templates used by the legacy rules generator; users may override any
    subset through ``GenerationConfig.validation_templates``.

Templates use ``${name}`` placeholders, matching the substitution done by
the generated TypeScript ``getMessage`` helper.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.messages")

MessageTable = Mapping[str, Mapping[str, str]]


def _freeze(table: Dict[str, Dict[str, str]]) -> MessageTable:
    return MappingProxyType(
        {key: MappingProxyType(dict(locales)) for key, locales in table.items()}
    )


# ---------------------------------------------------------------------------
# Legacy rule templates (required … enum)
# ---------------------------------------------------------------------------

DEFAULT_VALIDATION_TEMPLATES: MessageTable = _freeze(
    {
        "required": {
            "ja": "${displayName}は必須です",
            "en": "${displayName} is required",
            "vi": "${displayName} là bắt buộc",
            "ko": "${displayName}은(는) 필수입니다",
            "zh": "${displayName}为必填项",
        },
        "minLength": {
            "ja": "${displayName}は${min}文字以上で入力してください",
            "en": "${displayName} must be at least ${min} characters",
            "vi": "${displayName} phải có ít nhất ${min} ký tự",
            "ko": "${displayName}은(는) ${min}자 이상이어야 합니다",
            "zh": "${displayName}至少需要${min}个字符",
        },
        "maxLength": {
            "ja": "${displayName}は${max}文字以内で入力してください",
            "en": "${displayName} must be at most ${max} characters",
            "vi": "${displayName} tối đa ${max} ký tự",
            "ko": "${displayName}은(는) ${max}자 이하여야 합니다",
            "zh": "${displayName}不能超过${max}个字符",
        },
        "min": {
            "ja": "${displayName}は${min}以上の値を入力してください",
            "en": "${displayName} must be at least ${min}",
            "vi": "${displayName} phải lớn hơn hoặc bằng ${min}",
            "ko": "${displayName}은(는) ${min} 이상이어야 합니다",
            "zh": "${displayName}不能小于${min}",
        },
        "max": {
            "ja": "${displayName}は${max}以下の値を入力してください",
            "en": "${displayName} must be at most ${max}",
            "vi": "${displayName} phải nhỏ hơn hoặc bằng ${max}",
            "ko": "${displayName}은(는) ${max} 이하여야 합니다",
            "zh": "${displayName}不能大于${max}",
        },
        "email": {
            "ja": "${displayName}の形式が正しくありません",
            "en": "${displayName} is not a valid email address",
            "vi": "${displayName} không phải là địa chỉ email hợp lệ",
            "ko": "${displayName} 형식이 올바르지 않습니다",
            "zh": "${displayName}不是有效的邮箱地址",
        },
        "url": {
            "ja": "${displayName}は有効なURLではありません",
            "en": "${displayName} is not a valid URL",
            "vi": "${displayName} không phải là URL hợp lệ",
            "ko": "${displayName}은(는) 유효한 URL이 아닙니다",
            "zh": "${displayName}不是有效的URL",
        },
        "pattern": {
            "ja": "${displayName}の形式が正しくありません",
            "en": "${displayName} format is invalid",
            "vi": "${displayName} không đúng định dạng",
            "ko": "${displayName} 형식이 올바르지 않습니다",
            "zh": "${displayName}格式不正确",
        },
        "enum": {
            "ja": "${displayName}の値が無効です",
            "en": "${displayName} has an invalid value",
            "vi": "${displayName} có giá trị không hợp lệ",
            "ko": "${displayName} 값이 유효하지 않습니다",
            "zh": "${displayName}的值无效",
        },
    }
)

# ---------------------------------------------------------------------------
# i18n.ts catalog
# ---------------------------------------------------------------------------

DEFAULT_VALIDATION_MESSAGES: MessageTable = _freeze(
    {
        "required": {
            "en": "${displayName} is required",
            "ja": "${displayName}は必須です",
            "vi": "${displayName} là bắt buộc",
            "ko": "${displayName}은(는) 필수입니다",
            "zh-CN": "${displayName}是必填项",
            "zh-TW": "${displayName}為必填欄位",
            "th": "${displayName} จำเป็นต้องกรอก",
            "es": "${displayName} es obligatorio",
        },
        "minLength": {
            "en": "${displayName} must be at least ${min} characters",
            "ja": "${displayName}は${min}文字以上で入力してください",
            "vi": "${displayName} phải có ít nhất ${min} ký tự",
            "ko": "${displayName}은(는) ${min}자 이상이어야 합니다",
            "zh-CN": "${displayName}至少需要${min}个字符",
            "zh-TW": "${displayName}至少需要${min}個字元",
            "th": "${displayName} ต้องมีอย่างน้อย ${min} ตัวอักษร",
            "es": "${displayName} debe tener al menos ${min} caracteres",
        },
        "maxLength": {
            "en": "${displayName} must be at most ${max} characters",
            "ja": "${displayName}は${max}文字以内で入力してください",
            "vi": "${displayName} không được quá ${max} ký tự",
            "ko": "${displayName}은(는) ${max}자 이하여야 합니다",
            "zh-CN": "${displayName}最多${max}个字符",
            "zh-TW": "${displayName}最多${max}個字元",
            "th": "${displayName} ต้องไม่เกิน ${max} ตัวอักษร",
            "es": "${displayName} debe tener como máximo ${max} caracteres",
        },
        "min": {
            "en": "${displayName} must be at least ${min}",
            "ja": "${displayName}は${min}以上で入力してください",
            "vi": "${displayName} phải lớn hơn hoặc bằng ${min}",
            "ko": "${displayName}은(는) ${min} 이상이어야 합니다",
            "zh-CN": "${displayName}必须大于等于${min}",
            "zh-TW": "${displayName}必須大於等於${min}",
            "th": "${displayName} ต้องมากกว่าหรือเท่ากับ ${min}",
            "es": "${displayName} debe ser al menos ${min}",
        },
        "max": {
            "en": "${displayName} must be at most ${max}",
            "ja": "${displayName}は${max}以下で入力してください",
            "vi": "${displayName} phải nhỏ hơn hoặc bằng ${max}",
            "ko": "${displayName}은(는) ${max} 이하여야 합니다",
            "zh-CN": "${displayName}必须小于等于${max}",
            "zh-TW": "${displayName}必須小於等於${max}",
            "th": "${displayName} ต้องน้อยกว่าหรือเท่ากับ ${max}",
            "es": "${displayName} debe ser como máximo ${max}",
        },
        "email": {
            "en": "Please enter a valid email address",
            "ja": "有効なメールアドレスを入力してください",
            "vi": "Vui lòng nhập địa chỉ email hợp lệ",
            "ko": "유효한 이메일 주소를 입력하세요",
            "zh-CN": "请输入有效的电子邮件地址",
            "zh-TW": "請輸入有效的電子郵件地址",
            "th": "กรุณากรอกอีเมลที่ถูกต้อง",
            "es": "Por favor, introduce una dirección de correo electrónico válida",
        },
        "url": {
            "en": "Please enter a valid URL",
            "ja": "有効なURLを入力してください",
            "vi": "Vui lòng nhập URL hợp lệ",
            "ko": "유효한 URL을 입력하세요",
            "zh-CN": "请输入有效的URL",
            "zh-TW": "請輸入有效的網址",
            "th": "กรุณากรอก URL ที่ถูกต้อง",
            "es": "Por favor, introduce una URL válida",
        },
        "pattern": {
            "en": "${displayName} format is invalid",
            "ja": "${displayName}の形式が正しくありません",
            "vi": "${displayName} không đúng định dạng",
            "ko": "${displayName} 형식이 올바르지 않습니다",
            "zh-CN": "${displayName}格式不正确",
            "zh-TW": "${displayName}格式不正確",
            "th": "รูปแบบ${displayName}ไม่ถูกต้อง",
            "es": "El formato de ${displayName} no es válido",
        },
    }
)


# ---------------------------------------------------------------------------
# Merging & formatting
# ---------------------------------------------------------------------------


def merge_validation_templates(
    user_templates: Optional[Mapping[str, Mapping[str, str]]],
) -> Dict[str, Dict[str, str]]:
    """
    Overlay *user_templates* onto the defaults.

    Only known rule keys are merged; per-locale entries in the user table
    replace the default text for that locale.
    """
    merged: Dict[str, Dict[str, str]] = {
        key: dict(locales) for key, locales in DEFAULT_VALIDATION_TEMPLATES.items()
    }
    for key, overrides in (user_templates or {}).items():
        if overrides and key in merged:
            merged[key].update(overrides)
        elif key not in merged:
            logger.debug("Ignoring unknown validation template key %r", key)
    return merged


def merge_i18n_messages(
    locales: List[str],
    user_messages: Optional[Mapping[str, Mapping[str, str]]],
) -> Dict[str, Dict[str, str]]:
    """
    Build the ``validationMessages`` table for ``i18n.ts``.

    Default messages are kept only for the configured *locales*; every user
    message is then added as given, including keys and locales the defaults
    do not know.
    """
    merged: Dict[str, Dict[str, str]] = {}
    for key, defaults in DEFAULT_VALIDATION_MESSAGES.items():
        merged[key] = {loc: defaults[loc] for loc in locales if loc in defaults}
    for key, user_locales in (user_messages or {}).items():
        if not user_locales:
            continue
        merged.setdefault(key, {}).update(user_locales)
    return merged


def format_message(template: str, variables: Mapping[str, Any]) -> str:
    """Replace every ``${name}`` placeholder found in *variables*."""
    result: str = template
    for name, value in variables.items():
        result = re.sub(r"\$\{" + re.escape(name) + r"\}", lambda _m: str(value), result)
    return result


def localized_messages(
    templates: Mapping[str, Mapping[str, str]],
    rule: str,
    locales: List[str],
    variables: Mapping[str, Union[str, int, float]],
    fallback_locale: Optional[str] = None,
) -> Dict[str, str]:
    """Render one rule's message for every locale, falling back per locale."""
    rule_templates: Mapping[str, str] = templates.get(rule, {})
    rendered: Dict[str, str] = {}
    for loc in locales:
        template: Optional[str] = rule_templates.get(loc)
        if template is None and fallback_locale:
            template = rule_templates.get(fallback_locale)
        if template is None:
            template = rule_templates.get("en", "")
        rendered[loc] = format_message(template, variables)
    return rendered


__all__: List[str] = [
    "MessageTable",
    "DEFAULT_VALIDATION_TEMPLATES",
    "DEFAULT_VALIDATION_MESSAGES",
    "merge_validation_templates",
    "merge_i18n_messages",
    "format_message",
    "localized_messages",
]

logger.debug("typegen.messages loaded.")
