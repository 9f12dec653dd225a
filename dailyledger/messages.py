"""Mini README: Caller-facing message catalog.

Structure:
    * CATALOG - message key -> locale -> text.
    * translate - look up a message for the configured (or explicit) locale.

Error messages, reset confirmations, the reset success texts, and the
placeholder shown for entries whose owner has been deleted all live here so
the business modules never embed literal user-facing strings. Arabic is the
language the ledger was first operated in; English is the default.
"""

from __future__ import annotations

from typing import Dict, Optional

from .configuration import get_settings

CATALOG: Dict[str, Dict[str, str]] = {
    "unauthenticated": {
        "en": "You must sign in first.",
        "ar": "يجب تسجيل الدخول أولاً",
    },
    "profile_missing": {
        "en": "The user profile does not exist.",
        "ar": "ملف المستخدم غير موجود",
    },
    "forbidden": {
        "en": "You do not have permission to access this data.",
        "ar": "ليس لديك صلاحية لعرض هذه البيانات",
    },
    "forbidden_admin": {
        "en": "Administrator privileges are required.",
        "ar": "ليس لديك صلاحيات المدير",
    },
    "user_not_found": {
        "en": "The user does not exist.",
        "ar": "المستخدم غير موجود",
    },
    "profile_not_found": {
        "en": "The requested profile does not exist.",
        "ar": "الملف المطلوب غير موجود",
    },
    "entry_not_found": {
        "en": "The daily entry does not exist.",
        "ar": "المدخل اليومي غير موجود",
    },
    "username_taken": {
        "en": "The username is already taken.",
        "ar": "اسم المستخدم موجود بالفعل",
    },
    "cannot_delete_admin": {
        "en": "An administrator account cannot be deleted.",
        "ar": "لا يمكن حذف حساب المدير",
    },
    "confirmation_mismatch": {
        "en": "The confirmation text is incorrect.",
        "ar": "نص التأكيد غير صحيح",
    },
    "invalid_input": {
        "en": "The submitted data is invalid.",
        "ar": "البيانات المدخلة غير صالحة",
    },
    "deleted_user": {
        "en": "deleted user",
        "ar": "مستخدم محذوف",
    },
    "complete_reset_phrase": {
        "en": "RESET EVERYTHING",
        "ar": "تصفير كامل",
    },
    "data_reset_phrase": {
        "en": "RESET DATA",
        "ar": "تصفير البيانات",
    },
    "complete_reset_done": {
        "en": (
            "The system was fully reset. All data and users were deleted"
            " except your administrator account."
        ),
        "ar": "تم تصفير النظام بالكامل بنجاح. تم حذف جميع البيانات والمستخدمين عدا حسابك كمدير.",
    },
    "data_reset_done": {
        "en": "All financial data was reset. Every user account was kept.",
        "ar": "تم تصفير جميع البيانات المالية بنجاح. تم الاحتفاظ بجميع المستخدمين.",
    },
}


def translate(key: str, locale: Optional[str] = None) -> str:
    """Return the catalog text for ``key``, falling back to English."""

    if key not in CATALOG:
        raise KeyError(f"Unknown message key '{key}'")
    entry = CATALOG[key]
    locale = locale or get_settings().locale
    return entry.get(locale, entry["en"])
