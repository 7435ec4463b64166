import re
import unittest

from idextract.helpers.patterns import (
    DRIVING_LICENSE_RULES,
    PASSPORT_RULES,
    MatchMode,
    PatternRule,
    rules_for,
    strip_all_whitespace,
)
from idextract.models import DocumentTypes


def _rule(rules, field):
    return next(rule for rule in rules if rule.field == field)


class TestPatternRule(unittest.TestCase):

    def test_first_group(self):
        rule = PatternRule(field="x", pattern=re.compile(r'ID\s+(\w+)'))
        self.assertEqual(rule.apply("card ID  AB12 end"), "AB12")

    def test_whole_match_with_cleanup(self):
        rule = PatternRule(field="x", pattern=re.compile(r'[a-z]\d{3}'), mode=MatchMode.WHOLE_MATCH,
                           cleanup=(str.strip, str.upper))
        self.assertEqual(rule.apply("ref b123"), "B123")

    def test_all_matches_needs_minimum(self):
        rule = PatternRule(field="x", pattern=re.compile(r'\d+'), mode=MatchMode.ALL_MATCHES,
                           position=-1, min_matches=2)
        self.assertIsNone(rule.apply("only 1 number"))
        self.assertEqual(rule.apply("1 then 2 then 3"), "3")

    def test_no_match_returns_none(self):
        rule = PatternRule(field="x", pattern=re.compile(r'ID\s+(\w+)'))
        self.assertIsNone(rule.apply("nothing here"))

    def test_rules_are_immutable(self):
        rule = DRIVING_LICENSE_RULES[0]
        with self.assertRaises(AttributeError):
            rule.field = "other"

    def test_strip_all_whitespace(self):
        self.assertEqual(strip_all_whitespace("01-01 -2030"), "01-01-2030")


class TestRulesFor(unittest.TestCase):

    def test_known_types(self):
        self.assertIs(rules_for(DocumentTypes.DRIVING_LICENSE), DRIVING_LICENSE_RULES)
        self.assertIs(rules_for("passport"), PASSPORT_RULES)

    def test_unknown_type_has_no_rules(self):
        self.assertEqual(rules_for("national_id"), ())
        self.assertEqual(rules_for(None), ())

    def test_driving_license_covers_every_field(self):
        self.assertEqual(
            {rule.field for rule in DRIVING_LICENSE_RULES},
            {"name", "document_number", "expiration_date", "date_of_birth"},
        )


class TestDrivingLicenseRules(unittest.TestCase):

    def test_name_stops_at_relationship_marker(self):
        rule = _rule(DRIVING_LICENSE_RULES, "name")
        self.assertEqual(rule.apply("Name John Smith S/O Robert Smith"), "John Smith")
        self.assertEqual(rule.apply("NAME © Priya Sharma D/O Ramesh Sharma"), "Priya Sharma")
        self.assertEqual(rule.apply("Name Anita Rao W/O Vikram Rao"), "Anita Rao")

    def test_name_runs_to_end_of_text(self):
        rule = _rule(DRIVING_LICENSE_RULES, "name")
        self.assertEqual(rule.apply("Holder Name Jane Doe"), "Jane Doe")

    def test_document_number_stops_at_doi(self):
        rule = _rule(DRIVING_LICENSE_RULES, "document_number")
        self.assertEqual(rule.apply("DL NO ABC1234567 DOI 01-01-2020"), "ABC1234567")
        self.assertEqual(rule.apply("License No © 'MH12 20110012345 DOI 10-10-2011"), "MH12 20110012345")

    def test_document_number_runs_to_end_of_text(self):
        rule = _rule(DRIVING_LICENSE_RULES, "document_number")
        self.assertEqual(rule.apply("Name Jane Doe DL NO XYZ7654321"), "XYZ7654321")

    def test_expiration_date_labels(self):
        rule = _rule(DRIVING_LICENSE_RULES, "expiration_date")
        self.assertEqual(rule.apply("Valid upto 01-01-2030"), "01-01-2030")
        self.assertEqual(rule.apply("VALID TILL: 02-03-2031"), "02-03-2031")
        self.assertEqual(rule.apply("Validity 04-05-2032"), "04-05-2032")
        self.assertEqual(rule.apply("Expiry : 06-07-2033"), "06-07-2033")

    def test_expiration_date_spacing_is_removed(self):
        rule = _rule(DRIVING_LICENSE_RULES, "expiration_date")
        self.assertEqual(rule.apply("Valid Till 01-01 -2030"), "01-01-2030")

    def test_date_of_birth_labels(self):
        rule = _rule(DRIVING_LICENSE_RULES, "date_of_birth")
        self.assertEqual(rule.apply("DOB 05-05-1990"), "05-05-1990")
        self.assertEqual(rule.apply("Date of Birth: 06-06-1991"), "06-06-1991")

    def test_date_of_birth_wrong_format(self):
        rule = _rule(DRIVING_LICENSE_RULES, "date_of_birth")
        self.assertIsNone(rule.apply("DOB 05/05/1990"))


class TestPassportRules(unittest.TestCase):

    def test_number_is_uppercased(self):
        rule = _rule(PASSPORT_RULES, "document_number")
        self.assertEqual(rule.apply("passport no. k12345678 issued"), "K12345678")

    def test_dates_need_two_matches(self):
        dob = _rule(PASSPORT_RULES, "date_of_birth")
        expiry = _rule(PASSPORT_RULES, "expiration_date")
        self.assertIsNone(dob.apply("Date of Birth 01/01/1990"))
        self.assertIsNone(expiry.apply("Date of Birth 01/01/1990"))

    def test_first_and_last_dates(self):
        text = "01/01/1990 issued 15/06/2020 expires 14/06/2030"
        self.assertEqual(_rule(PASSPORT_RULES, "date_of_birth").apply(text), "01/01/1990")
        self.assertEqual(_rule(PASSPORT_RULES, "expiration_date").apply(text), "14/06/2030")


if __name__ == '__main__':
    unittest.main()
