"""Tests for bundle layering: precedence order, overrides and fallback inheritance.

Python 3.13+.
"""

from __future__ import annotations

import pytest

from ftlcatalog.diagnostics import (
    LocaleNotSupportedError,
    MessageAttributeNotExistsError,
    MessageIdNotExistsError,
    MessageIdValueNotExistsError,
)
from ftlcatalog.localization import (
    BundleOptions,
    CatalogBuilder,
    Locales,
    ancestor_paths,
    build_bundle,
    layering_order,
    split_key,
)

_PLAIN = BundleOptions(use_isolating=False)


def _term_value(builder: CatalogBuilder, catalog: str, locale: str) -> str:
    """Format a probe message exposing the effective value of -t."""
    l10n = builder.build()
    return l10n.try_translate(catalog, locale, "probe")


class TestHelpers:
    """Test key splitting and ancestor directories."""

    @pytest.mark.parametrize(
        ("catalog", "expected"),
        [("home", ("",)), ("shop/cart", ("", "shop")), ("a/b/name", ("", "a", "a/b"))],
    )
    def test_ancestor_paths(self, catalog: str, expected: tuple[str, ...]) -> None:
        """Ancestors run from the locale root down to the parent directory."""
        assert ancestor_paths(catalog) == expected

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("welcome", ("welcome", None)),
            ("login.title", ("login", "title")),
            ("login.title.extra", ("login", "title.extra")),
        ],
    )
    def test_split_key(self, key: str, expected: tuple[str, str | None]) -> None:
        """Keys split at the first separator."""
        assert split_key(key) == expected


class TestLayeringOrder:
    """Test the precedence order of contributing documents."""

    def test_full_order(self) -> None:
        """Globals, then path documents by depth and route, then named documents."""
        locales = Locales.from_pairs([("en", None), ("en-GB", "en")])
        builder = CatalogBuilder(locales)
        g0 = builder.add_global_resource("-g = G")
        root_gb = builder.add_path_resource("", "en-GB", "-r = GB")
        root_en = builder.add_path_resource("", "en", "-r = EN")
        shop_en = builder.add_path_resource("shop", "en", "-s = EN")
        shop_gb = builder.add_path_resource("shop", "en-GB", "-s = GB")
        builder.add_path_resource("other", "en", "-o = EN")
        named_gb = builder.add_named_resource("shop/cart", "en-GB", "probe = GB")
        named_en = builder.add_named_resource("shop/cart", "en", "probe = EN")
        g1 = builder.add_global_resource("-g = G2")

        order = layering_order(builder.store, locales, "shop/cart", "en-GB")

        assert order == (g0, g1, root_en, root_gb, shop_en, shop_gb, named_en, named_gb)
        assert layering_order(builder.store, locales, "shop/cart", "en") == (
            g0,
            g1,
            root_en,
            shop_en,
            named_en,
        )

    def test_unknown_locale(self) -> None:
        """Only main locales can be layered."""
        locales = Locales.from_pairs([("en-GB", "en")])
        builder = CatalogBuilder(locales)

        with pytest.raises(LocaleNotSupportedError):
            layering_order(builder.store, locales, "home", "en")

    def test_bundle_records_documents(self) -> None:
        """Built bundles remember their layering and effective entries."""
        locales = Locales.from_pairs([("en", None)])
        builder = CatalogBuilder(locales, options=_PLAIN)
        builder.add_global_resource("-brand = Global\nshared = Shared")
        builder.add_named_resource("home", "en", "-brand = Home\ntitle = { -brand }")

        bundle = build_bundle(builder.store, locales, _PLAIN, "home", "en")

        assert (bundle.catalog, bundle.locale, bundle.documents) == ("home", "en", (0, 1))
        assert set(bundle.messages) == {"shared", "title"}
        term = bundle.get_term("brand")
        assert term is not None
        assert term.value is not None
        assert bundle.get_message("missing") is None


class TestOverrides:
    """Test that later layers override earlier ones."""

    def test_path_document_overrides_global(self) -> None:
        """A path document at the catalog's directory beats a global one."""
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]), options=_PLAIN)
        builder.add_global_resource("-t = A")
        builder.add_path_resource("shop", "en", "-t = B")
        builder.add_named_resource("shop/cart", "en", "probe = { -t }")

        assert _term_value(builder, "shop/cart", "en") == "B"

    def test_locale_root_overrides_global(self) -> None:
        """Redefining a global id at the locale root builds and wins."""
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]), options=_PLAIN)
        builder.add_global_resource("-t = A")
        builder.add_path_resource("", "en", "-t = B")
        builder.add_named_resource("home", "en", "probe = { -t }")

        assert _term_value(builder, "home", "en") == "B"

    def test_message_redefined_in_every_layer(self) -> None:
        """Messages are overridden like terms, across all three layers."""
        locales = Locales.from_pairs([("en", None), ("en-GB", "en")])
        builder = CatalogBuilder(locales, options=_PLAIN)
        builder.add_global_resource("probe = global")
        builder.add_path_resource("", "en", "probe = path")
        builder.add_named_resource("home", "en", "probe = named (en)")
        builder.add_named_resource("home", "en-GB", "probe = named (GB)")

        l10n = builder.build()

        assert l10n.try_translate("home", "en", "probe") == "named (en)"
        assert l10n.try_translate("home", "en-GB", "probe") == "named (GB)"

    def test_catalog_overrides_path_document(self) -> None:
        """The catalog's own definition wins."""
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]), options=_PLAIN)
        builder.add_global_resource("-t = A")
        builder.add_path_resource("shop", "en", "-t = B")
        builder.add_named_resource("shop/cart", "en", "-t = C\nprobe = { -t }")

        assert _term_value(builder, "shop/cart", "en") == "C"

    def test_deeper_directory_overrides_shallower(self) -> None:
        """Path documents closer to the catalog win."""
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]), options=_PLAIN)
        builder.add_path_resource("", "en", "-t = root")
        builder.add_path_resource("shop", "en", "-t = shop")
        builder.add_named_resource("shop/cart", "en", "probe = { -t }")
        builder.add_named_resource("home", "en", "probe = { -t }")

        assert _term_value(builder, "shop/cart", "en") == "shop"
        assert _term_value(builder, "home", "en") == "root"

    def test_sibling_directory_not_visible(self) -> None:
        """Path documents only reach catalogs below their directory."""
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]), options=_PLAIN)
        builder.add_path_resource("", "en", "-t = root")
        builder.add_path_resource("blog", "en", "-t = blog")
        builder.add_named_resource("shop/cart", "en", "probe = { -t }")

        assert _term_value(builder, "shop/cart", "en") == "root"

    def test_later_global_overrides_earlier(self) -> None:
        """Globals apply in registration order."""
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]), options=_PLAIN)
        builder.add_global_resource("-t = first")
        builder.add_global_resource("-t = second")
        builder.add_named_resource("home", "en", "probe = { -t }")

        assert _term_value(builder, "home", "en") == "second"


class TestFallbackLayering:
    """Test inheritance along the resolution route."""

    def _builder(self) -> CatalogBuilder:
        locales = Locales.from_pairs([("en", None), ("en-GB", "en")])
        builder = CatalogBuilder(locales, options=_PLAIN)
        builder.add_path_resource("", "en", "-t = colour (en)\n-u = en only")
        builder.add_named_resource("home", "en", "probe = { -t }\nother = { -u }")
        return builder

    def test_inherited_from_fallback(self) -> None:
        """Definitions at the fallback locale are visible to the main locale."""
        builder = self._builder()

        l10n = builder.build()

        assert l10n.try_translate("home", "en-GB", "probe") == "colour (en)"
        assert l10n.try_translate("home", "en-GB", "other") == "en only"

    def test_main_locale_redefinition_wins(self) -> None:
        """A definition at the main locale beats the fallback's."""
        builder = self._builder()
        builder.add_path_resource("", "en-GB", "-t = colour (GB)")

        l10n = builder.build()

        assert l10n.try_translate("home", "en-GB", "probe") == "colour (GB)"
        assert l10n.try_translate("home", "en", "probe") == "colour (en)"

    def test_named_document_inherited(self) -> None:
        """A catalog missing at the main locale uses the fallback's document."""
        builder = self._builder()

        bundle = builder.build().get_bundle("home", "en-GB")

        assert bundle.documents == (0, 1)


class TestTransformHook:
    """Test the text transform hook."""

    def test_text_elements_transformed(self) -> None:
        """Literal text is rewritten while placeables are formatted normally."""
        options = BundleOptions(use_isolating=False, transform=str.upper)
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]), options=options)
        builder.add_named_resource("home", "en", "welcome = Welcome { $name }!")

        l10n = builder.build()

        assert l10n.try_translate("home", "en", "welcome", {"name": "Alan"}) == "WELCOME Alan!"

    def test_stored_documents_untouched(self) -> None:
        """The transform only affects bundles, not the parsed documents."""
        options = BundleOptions(transform=str.upper)
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]), options=options)
        builder.add_named_resource("home", "en", "welcome = Welcome")

        l10n = builder.build()

        assert l10n.documents[0].source == "welcome = Welcome"


class TestResolvePattern:
    """Test structural lookups on a bundle."""

    @pytest.fixture
    def bundle_source(self) -> str:
        return "plain = Plain\nlogin = Login\n    .title = Sign in\nonly-attrs =\n    .label = L\n"

    def test_value_and_attribute(self, bundle_source: str) -> None:
        """Values and attributes resolve to their patterns."""
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]))
        builder.add_named_resource("home", "en", bundle_source)
        bundle = builder.build().get_bundle("home", "en")

        assert bundle.resolve_pattern("plain").elements
        assert bundle.resolve_pattern("login", "title").elements
        assert bundle.resolve_pattern("only-attrs", "label").elements

    @pytest.mark.parametrize(
        ("message_id", "attribute", "error"),
        [
            ("absent", None, MessageIdNotExistsError),
            ("login", "absent", MessageAttributeNotExistsError),
            ("only-attrs", None, MessageIdValueNotExistsError),
            ("only-attrs", "absent", MessageAttributeNotExistsError),
        ],
    )
    def test_structural_errors(
        self,
        bundle_source: str,
        message_id: str,
        attribute: str | None,
        error: type[Exception],
    ) -> None:
        """Missing messages, attributes and values raise distinct errors."""
        builder = CatalogBuilder(Locales.from_pairs([("en", None)]))
        builder.add_named_resource("home", "en", bundle_source)
        bundle = builder.build().get_bundle("home", "en")

        with pytest.raises(error):
            bundle.resolve_pattern(message_id, attribute)
