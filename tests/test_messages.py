"""Tests for message bundles and template stores."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from timeago_text.messages.store import (
    Messages,
    MessagesBuilder,
    _read_bundle,
    available_locales,
    build_messages,
    default_messages,
    load_bundle,
    locale_candidates,
    normalize_locale,
    reset_default_messages,
)
from timeago_text.utils.exceptions import MessageBundleError, MessageBundleNotFound

PACKAGED_LOCALES = ["de", "en", "es", "fr", "it", "nl", "pt"]


@pytest.fixture
def bundle_dir(tmp_path):
    (tmp_path / "eo.yaml").write_text("now: ĵus nun\n", encoding="utf-8")
    (tmp_path / "es_AR.yaml").write_text("now: recién\n", encoding="utf-8")
    (tmp_path / "zz.yaml").write_text("- not\n- a mapping\n", encoding="utf-8")
    return tmp_path


class TestMessages:
    """Test the read-only store."""

    def test_get_returns_template(self):
        messages = Messages({"now": "just now"})
        assert messages.get("now") == "just now"

    def test_missing_key_returns_key(self):
        assert Messages({}).get("x_days.past") == "x_days.past"

    def test_format_substitutes_count(self):
        messages = Messages({"x_days.past": "{0} days ago"})
        assert messages.format("x_days.past", 3) == "3 days ago"

    def test_format_failure_returns_template(self):
        messages = Messages({"bad": "{0:q} days"})
        assert messages.format("bad", 3) == "{0:q} days"

    def test_store_is_immutable(self):
        source = {"now": "just now"}
        messages = Messages(source)
        source["now"] = "changed"
        assert messages.get("now") == "just now"
        assert "now" in messages
        assert len(messages) == 1


class TestLocaleTags:
    """Test locale tag normalization."""

    @pytest.mark.parametrize(
        "tag, expected",
        [("en", "en"), ("ZH-tw", "zh_TW"), ("pt_br", "pt_BR"), (" es ", "es"), ("", "")],
    )
    def test_normalize(self, tag, expected):
        assert normalize_locale(tag) == expected

    def test_candidates(self):
        assert locale_candidates("pt-BR") == ["pt_BR", "pt"]
        assert locale_candidates("de") == ["de"]
        assert locale_candidates("") == []


class TestLoadBundle:
    """Test loading one locale's templates."""

    def test_packaged_bundle(self):
        assert load_bundle("fr")["x_days.past"] == "il y a {0} jours"

    def test_unknown_locale_raises(self):
        with pytest.raises(MessageBundleNotFound) as excinfo:
            load_bundle("xx")
        assert excinfo.value.locale == "xx"
        assert excinfo.value.searched

    def test_invalid_bundle_raises(self, bundle_dir):
        with pytest.raises(MessageBundleError):
            load_bundle("zz", (str(bundle_dir),))

    def test_search_path_wins_over_packaged(self, tmp_path):
        (tmp_path / "en.yaml").write_text("now: right now\n", encoding="utf-8")
        assert load_bundle("en", (str(tmp_path),))["now"] == "right now"

    def test_bundled_locales_share_keys(self):
        english = set(load_bundle("en"))
        for locale in PACKAGED_LOCALES:
            assert set(load_bundle(locale)) == english, locale

    def test_counting_templates_have_placeholder(self):
        for locale in PACKAGED_LOCALES:
            for key, template in load_bundle(locale).items():
                if key.startswith("x_"):
                    assert "{0}" in template, (locale, key)

    def test_available_locales(self, bundle_dir):
        assert available_locales() == PACKAGED_LOCALES
        assert {"eo", "es_AR"} <= set(available_locales([str(bundle_dir)]))


class TestBuildMessages:
    """Test locale resolution and fallback."""

    def test_spanish(self):
        messages = build_messages("es")
        assert messages.locale == "es"
        assert messages.get("now") == "justo ahora"

    def test_regional_tag_uses_language_bundle(self):
        messages = build_messages("pt-BR")
        assert messages.locale == "pt"
        assert messages.get("one_week.past") == "há uma semana"

    def test_unsupported_locale_falls_back(self):
        messages = build_messages("xx")
        assert messages.locale == "en"
        assert messages.get("now") == "just now"

    def test_unsupported_fallback_uses_english(self):
        messages = build_messages("xx", fallback_locale="yy")
        assert messages.get("now") == "just now"

    def test_missing_keys_come_from_fallback(self, bundle_dir):
        messages = build_messages("eo", search_path=[bundle_dir])
        assert messages.locale == "eo"
        assert messages.get("now") == "ĵus nun"
        assert messages.get("x_days.past") == "{0} days ago"

    def test_regional_bundle_overlays_language_bundle(self, bundle_dir):
        messages = build_messages("es-AR", search_path=[bundle_dir])
        assert messages.locale == "es_AR"
        assert messages.get("now") == "recién"
        assert messages.get("one_minute.past") == "hace un minuto"

    def test_invalid_bundle_falls_back(self, bundle_dir):
        messages = build_messages("zz", search_path=[bundle_dir])
        assert messages.get("now") == "just now"

    def test_undecodable_bundle_falls_back(self, tmp_path):
        (tmp_path / "eo.yaml").write_bytes(b"now: \xff\xfe bad\n")
        with pytest.raises(MessageBundleError):
            load_bundle("eo", (str(tmp_path),))
        messages = build_messages("eo", search_path=[tmp_path])
        assert messages.locale == "en"
        assert messages.get("now") == "just now"

    def test_unreadable_bundle_raises_bundle_error(self, tmp_path):
        with pytest.raises(MessageBundleError) as excinfo:
            _read_bundle("eo", tmp_path / "missing.yaml")
        assert excinfo.value.locale == "eo"

    def test_custom_templates_override(self):
        messages = build_messages("en", templates={"now": "moments ago"})
        assert messages.get("now") == "moments ago"
        assert messages.get("one_day.past") == "one day ago"

    def test_search_path_from_config(self, monkeypatch, bundle_dir):
        from timeago_text.utils.config import get_config

        monkeypatch.setenv("TIMEAGO_TEXT__MESSAGES__SEARCH_PATH", str(bundle_dir))
        get_config.cache_clear()
        assert build_messages("eo").get("now") == "ĵus nun"


class TestMessagesBuilder:
    """Test the fluent builder."""

    def test_with_locale(self):
        assert MessagesBuilder.start().with_locale("de").build().get("now") == "gerade eben"

    def test_default_locale(self):
        assert MessagesBuilder.start().with_locale("de").default_locale().build().locale == "en"

    def test_with_fallback(self):
        messages = MessagesBuilder.start().with_locale("xx").with_fallback("it").build()
        assert messages.get("now") == "proprio ora"

    def test_with_templates_and_search_path(self, bundle_dir):
        messages = (
            MessagesBuilder.start()
            .with_locale("eo")
            .with_search_path(bundle_dir)
            .with_templates({"x_days.past": "antaŭ {0} tagoj"})
            .build()
        )
        assert messages.get("now") == "ĵus nun"
        assert messages.format("x_days.past", 4) == "antaŭ 4 tagoj"


class TestDefaultMessages:
    """Test the lazily built process-wide store."""

    def test_created_once(self):
        assert default_messages() is default_messages()

    def test_reset_rebuilds(self):
        first = default_messages()
        reset_default_messages()
        assert default_messages() is not first

    def test_concurrent_first_use(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            stores = list(pool.map(lambda _: default_messages(), range(32)))
        assert all(store is stores[0] for store in stores)
