"""Tests for dialect-quoted SQL building."""

from db_merge.sql import build_offset_insert, build_select, column_list, qualified_name, quote_identifier


class TestQuoting:
    """Identifiers are always backtick-quoted and escaped."""

    def test_plain_identifier(self) -> None:
        assert quote_identifier("orders") == "`orders`"

    def test_reserved_word(self) -> None:
        assert quote_identifier("select") == "`select`"

    def test_embedded_backtick(self) -> None:
        assert quote_identifier("a`b") == "`a``b`"

    def test_qualified_name(self) -> None:
        assert qualified_name("shop", "orders") == "`shop`.`orders`"

    def test_column_list(self) -> None:
        assert column_list(["id", "total"]) == "`id`, `total`"


class TestBuildOffsetInsert:
    """INSERT ... SELECT construction."""

    def test_single_offset_column(self) -> None:
        sql = build_offset_insert("src", "dst", "orders", [("id", 500)], ["total"])
        assert sql == (
            "INSERT INTO `dst`.`orders` (`id`, `total`) "
            "SELECT `id` + 500, `total` FROM `src`.`orders`"
        )

    def test_no_remaining_columns(self) -> None:
        sql = build_offset_insert("src", "dst", "ids", [("id", 1)], [])
        assert sql == "INSERT INTO `dst`.`ids` (`id`) SELECT `id` + 1 FROM `src`.`ids`"


class TestBuildSelect:
    def test_select(self) -> None:
        assert build_select("src", "orders", ["id"]) == "SELECT `id` FROM `src`.`orders`"
