import unittest

from callgrind_diff.options import (
    ConfigError,
    DisplayConfig,
    RelativeMode,
    RelativeTo,
    Show,
    SortBy,
    SortField,
    SortOrder,
    parse_relative_to,
    parse_show,
    parse_sort_by,
    sanitize_show,
)


class TestParseSortBy(unittest.TestCase):

    def test_fields(self):
        self.assertEqual(parse_sort_by("symbol"), SortBy(SortField.SYMBOL))
        self.assertEqual(parse_sort_by("first-ir"), SortBy(SortField.FIRST_IR))
        self.assertEqual(parse_sort_by("last-ir"), SortBy(SortField.LAST_IR))
        self.assertEqual(parse_sort_by("column3"), SortBy(SortField.COLUMN, column=3))

    def test_order_prefix(self):
        self.assertEqual(parse_sort_by("+symbol"), SortBy(SortField.SYMBOL, SortOrder.ASCENDING))
        self.assertEqual(parse_sort_by("-first-ir"), SortBy(SortField.FIRST_IR, SortOrder.DESCENDING))
        self.assertEqual(parse_sort_by("-column1"), SortBy(SortField.COLUMN, SortOrder.DESCENDING, 1))

    def test_invalid(self):
        for text in ("", "-", "column", "column-1", "columnx", "name", "+-symbol"):
            with self.subTest(text=text):
                with self.assertRaises(ConfigError):
                    parse_sort_by(text)


class TestParseRelativeTo(unittest.TestCase):

    def test_modes(self):
        self.assertEqual(parse_relative_to("first"), RelativeTo(RelativeMode.FIRST))
        self.assertEqual(parse_relative_to("last"), RelativeTo(RelativeMode.LAST))
        self.assertEqual(parse_relative_to("previous"), RelativeTo(RelativeMode.PREVIOUS))
        self.assertEqual(parse_relative_to("column0"), RelativeTo(RelativeMode.COLUMN, 0))

    def test_invalid(self):
        for text in ("", "next", "column", "column1.5"):
            with self.subTest(text=text):
                with self.assertRaises(ConfigError):
                    parse_relative_to(text)


class TestShow(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(parse_show("ircount, percentagediff"), [Show.IR_COUNT, Show.PERCENTAGE_DIFF])
        self.assertEqual(parse_show(""), [])

    def test_parse_invalid(self):
        with self.assertRaises(ConfigError):
            parse_show("ircount,percent")

    def test_all_expands(self):
        expected = [Show.IR_COUNT_DIFF, Show.PERCENTAGE_DIFF, Show.IR_COUNT]
        self.assertEqual(sanitize_show([]), expected)
        self.assertEqual(sanitize_show([Show.IR_COUNT, Show.ALL]), expected)

    def test_duplicates_keep_first_occurrence(self):
        self.assertEqual(
            sanitize_show([Show.IR_COUNT, Show.IR_COUNT_DIFF, Show.IR_COUNT]),
            [Show.IR_COUNT, Show.IR_COUNT_DIFF],
        )

    def test_config_sanitizes(self):
        self.assertEqual(DisplayConfig(show=[Show.IR_COUNT, Show.IR_COUNT]).show, [Show.IR_COUNT])
        self.assertEqual(len(DisplayConfig().show), 3)


class TestCheckColumns(unittest.TestCase):

    def test_in_range(self):
        config = DisplayConfig(
            sort_by=SortBy(SortField.COLUMN, column=1),
            relative_to=RelativeTo(RelativeMode.COLUMN, 1),
        )
        config.check_columns(2)

    def test_relative_to_out_of_range(self):
        with self.assertRaises(ConfigError):
            DisplayConfig(relative_to=RelativeTo(RelativeMode.COLUMN, 2)).check_columns(2)

    def test_sort_by_out_of_range(self):
        with self.assertRaises(ConfigError):
            DisplayConfig(sort_by=SortBy(SortField.COLUMN, column=5)).check_columns(2)


if __name__ == "__main__":
    unittest.main()
