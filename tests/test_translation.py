import pytest

from visindigo.translation import (
    Language,
    TranslatableObject,
    TranslationDocument,
    TranslationHost,
    TranslationSubHost,
)


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class Recorder(TranslatableObject):
    def __init__(self):
        self.calls = 0

    def on_translating(self):
        self.calls += 1


@pytest.fixture
def sub_host(tmp_path):
    i18n = tmp_path / "resource" / "i18n"
    _write(i18n / "zh_SC.vil", "title:Default\nonly_default:D\n")
    _write(i18n / "en_US.vil", "title:English\n")
    host = TranslationSubHost("pkg", root_path=str(tmp_path), default_language=Language.ZH_SC)
    host.add_translation_file_name(Language.ZH_SC, "zh_SC.vil")
    host.add_translation_file_name(Language.EN_US, "en_US.vil")
    return host


def test_document_loads_and_skips_comments(tmp_path):
    path = tmp_path / "en_US.vil"
    _write(path, "greeting:Hello\n# note:x\n// other:y\n indented:no\n\nurl:a:b\n")
    doc = TranslationDocument(str(path))
    assert doc.load() is True
    assert doc.loaded is True
    assert doc.translate("greeting") == "Hello"
    assert doc.translate("url") == "a:b"
    assert doc.translate("# note") == "# note"
    assert set(doc.translations) == {"greeting", "url"}


def test_document_first_definition_wins(tmp_path):
    path = tmp_path / "dup.vil"
    _write(path, "k:first\nk:second\n")
    doc = TranslationDocument(str(path))
    doc.load()
    assert doc.translate("k") == "first"


def test_document_load_failures(tmp_path):
    assert TranslationDocument("").load() is False
    doc = TranslationDocument(str(tmp_path / "missing.vil"))
    assert doc.load() is False
    assert doc.loaded is False


def test_parse_line_without_colon():
    doc = TranslationDocument()
    doc.parse_line("solo")
    assert doc.translate("solo") == ""


def test_sub_host_current_then_default(sub_host):
    sub_host.on_init(Language.EN_US)
    assert sub_host.get_translation("title") == "English"
    assert sub_host.get_translation("only_default") == "D"
    assert sub_host.get_translation("missing") == "missing"


def test_sub_host_without_documents_returns_key():
    host = TranslationSubHost("empty")
    assert host.get_translation("anything") == "anything"


def test_top_translation_is_empty(sub_host):
    top = TranslationHost()
    top.register_sub_host(sub_host)
    sub_host.on_init(Language.EN_US)
    assert top.top_translation("x") == ""
    assert sub_host.get_translation("missing") == ""


def test_unsupported_language_keeps_current(sub_host):
    sub_host.on_init(Language.EN_US)
    sub_host.on_global_language_change(Language.JA_JP)
    assert sub_host.get_translation("title") == "English"


def test_first_file_name_kept(sub_host):
    sub_host.add_translation_file_name(Language.EN_US, "other.vil", True)
    assert sub_host.language_files[Language.EN_US].file_name == "en_US.vil"
    assert sub_host.language_files[Language.EN_US].in_rc is False


def test_in_rc_files_come_from_resource_path(tmp_path):
    _write(tmp_path / "rc" / "resource" / "i18n" / "fr.vil", "title:Titre\n")
    host = TranslationSubHost("pkg", root_path=str(tmp_path / "root"),
                              resource_path=str(tmp_path / "rc"),
                              default_language=Language.FR_FR)
    host.add_translation_file_name(Language.FR_FR, "fr.vil", True)
    host.on_init(Language.FR_FR)
    assert host.get_translation("title") == "Titre"


def test_objects_follow_language_change(sub_host):
    top = TranslationHost()
    top.register_sub_host(sub_host)
    obj = Recorder()
    sub_host.add_translatable_object(obj)
    sub_host.add_translatable_object(obj)
    assert len(sub_host.targets) == 1
    sub_host.on_init(Language.EN_US)
    assert obj.calls == 1
    assert obj.get_translation("title") == "English"
    top.change_language(Language.ZH_SC)
    assert obj.calls == 2
    assert obj.get_translation("title") == "Default"


def test_removed_object_returns_key(sub_host):
    obj = Recorder()
    sub_host.add_translatable_object(obj)
    sub_host.on_init(Language.EN_US)
    sub_host.remove_translatable_object(obj)
    assert obj.tr_host is None
    assert obj.get_translation("title") == "title"