"""Translation files and the hosts that hand translations to objects."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Callable, Optional

from .console import in_warning_style, print_line


class Language(IntEnum):
    EN_US = 0
    ZH_SC = 1
    ZH_TC = 2
    JA_JP = 3
    KO_KR = 4
    FR_FR = 5
    DE_DE = 6
    RU_RU = 7
    ES_ES = 8
    ES_MX = 9
    PT_BR = 10
    PT_PT = 11
    IT_IT = 12
    TH_TH = 13
    VI_VN = 14
    ID_ID = 15
    TR_TR = 16
    MS_MY = 17
    FIL_PH = 18
    AR_SA = 19
    HI_IN = 20
    BN_IN = 21
    GU_IN = 22
    KN_IN = 23
    ML_IN = 24
    MR_IN = 25
    TA_IN = 26
    TE_IN = 27
    NE_NP = 28
    SI_LK = 29
    UR_PK = 30
    FA_IR = 31


def _log_prefix(class_name: str, object_name: str) -> str:
    return f"[{datetime.now():%H:%M:%S}]{class_name}({object_name}):"


class TranslationDocument:
    """A file of "key:value" lines; lines starting with '#', '//' or a space are skipped."""

    def __init__(self, file_path: str = "") -> None:
        self.file_path = file_path
        self.name = file_path or "VITR"
        self.translations: dict[str, str] = {}
        self.loaded = False

    def _prefix(self) -> str:
        return _log_prefix(type(self).__name__, self.name)

    def load(self) -> bool:
        """Read the file; False if there is no path or it cannot be opened."""
        if not self.file_path:
            return False
        self.name = self.file_path
        try:
            with open(self.file_path, encoding="utf-8") as handle:
                lines = [raw.rstrip("\r\n") for raw in handle]
        except OSError:
            return False
        self.translations.clear()
        for line in lines:
            if not line or line.startswith(("#", "//", " ")):
                continue
            self.parse_line(line)
        self.loaded = True
        return True

    def parse_line(self, line: str) -> None:
        """Add one "key:value" line; a repeated key keeps its first value."""
        key, _, value = line.partition(":")
        if key in self.translations:
            print_line(in_warning_style(
                self._prefix() + f"Encountered redefined key: {key}, Redefining content ignored."
            ))
            return
        self.translations[key] = value

    def translate(self, key: str) -> str:
        """The value for key, or key itself when it is not defined."""
        if key in self.translations:
            return self.translations[key]
        print_line(in_warning_style(
            self._prefix() + f"Encountered undefined key: {key}, Returning key as value."
        ))
        return key


class TranslatableObject:
    """Something that fetches translations from a sub host and is told of language changes."""

    tr_host: Optional["TranslationSubHost"] = None
    translation_revision: int = 0

    def on_translating(self) -> None:
        """Called after the language has changed; counts the changes seen."""
        self.translation_revision += 1

    def get_translation(self, key: str) -> str:
        if self.tr_host is None:
            return key
        return self.tr_host.get_translation(key)


@dataclass
class TranslationFileInfo:
    file_name: str
    in_rc: bool = False


class TranslationSubHost:
    """The translations of one package: a current and a default document."""

    def __init__(
        self,
        name: str = "",
        root_path: str = "",
        resource_path: str = "",
        default_language: Language = Language.ZH_TC,
    ) -> None:
        self.name = name
        self.root_path = root_path
        self.resource_path = resource_path
        self.default_language = default_language
        self.targets: list[TranslatableObject] = []
        self.language_files: dict[Language, TranslationFileInfo] = {}
        self.current_doc: Optional[TranslationDocument] = None
        self.default_doc: Optional[TranslationDocument] = None
        self.host: Optional["TranslationHost"] = None

    def _prefix(self) -> str:
        return _log_prefix(type(self).__name__, self.name)

    def add_translatable_object(self, target: TranslatableObject) -> None:
        if target not in self.targets:
            self.targets.append(target)
            target.tr_host = self

    def remove_translatable_object(self, target: TranslatableObject) -> None:
        if target in self.targets:
            self.targets.remove(target)
            target.tr_host = None

    def add_translation_file_name(
        self, language: Language, file_name: str, in_rc: bool = False
    ) -> None:
        """Name the file for a language; the first name given for a language stays."""
        if language not in self.language_files:
            self.language_files[language] = TranslationFileInfo(file_name, in_rc)

    def _load_document(self, language: Language) -> Optional[TranslationDocument]:
        info = self.language_files.get(language)
        if info is None:
            print_line(in_warning_style(
                f"The Package '{self.name}' does not support the language."
            ))
            return None
        base = self.resource_path if info.in_rc else self.root_path
        file_path = os.path.join(base, "resource", "i18n", info.file_name)
        print_line(self._prefix() + f"Loading file in: '{file_path}'")
        document = TranslationDocument(file_path)
        return document if document.load() else None

    def on_global_language_change(self, language: Language) -> None:
        """Load the document for language and notify every object."""
        document = self._load_document(language)
        if document is not None:
            self.current_doc = document
        for target in list(self.targets):
            target.on_translating()

    def on_init(self, language: Language) -> None:
        """Load the default document, then switch to language."""
        document = self._load_document(self.default_language)
        if document is not None:
            self.default_doc = document
        self.on_global_language_change(language)

    def get_translation(self, key: str) -> str:
        """Look in the current, then the default document, then the top host."""
        if self.current_doc is None:
            return key
        result = self.current_doc.translate(key)
        if result != key:
            return result
        if self.default_doc is None:
            return key
        result = self.default_doc.translate(key)
        if result != key:
            return result
        if self.host is None:
            return key
        return self.host.top_translation(key)


class TranslationHost:
    """Relays language changes to every registered sub host."""

    def __init__(self) -> None:
        self.sub_hosts: list[TranslationSubHost] = []
        self.top_handlers: list[Callable[[str], str]] = []

    def register_sub_host(self, host: TranslationSubHost) -> None:
        if host not in self.sub_hosts:
            self.sub_hosts.append(host)
        host.host = self

    def change_language(self, language: Language) -> None:
        for host in list(self.sub_hosts):
            host.on_global_language_change(language)

    def top_translation(self, key: str) -> str:
        """Ask the top-level handlers in turn; an empty string when none knows key."""
        for handler in self.top_handlers:
            result = handler(key)
            if result and result != key:
                return result
        return ""