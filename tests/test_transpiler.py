import unittest

from roman_urdu.mapper.engine import MappingTable
from roman_urdu.mapper.vocabulary import DEFAULT_ENTRIES
from roman_urdu.transpiler.core import transpile


class TestTranspile(unittest.TestCase):
    def setUp(self):
        self.table = MappingTable.with_defaults()

    def t(self, text: str) -> str:
        return transpile(text, self.table)

    def test_every_default_token_alone(self):
        for token, replacement in DEFAULT_ENTRIES:
            self.assertEqual(self.t(f"({token})"), f"({replacement})", token)

    def test_prefix_sharing_tokens(self):
        # Boundary matching alone keeps bara/barabar/baraabar/barabargay apart
        self.assertEqual(self.t('barabar'), '===')
        self.assertEqual(self.t('bara'), '>')
        self.assertEqual(self.t('baraabar'), '>=')
        self.assertEqual(self.t('barabargay'), '!==')
        self.assertEqual(self.t('chhotaabar'), '<=')
        self.assertEqual(self.t('a barabar b bara c'), 'a === b > c')

    def test_token_inside_identifier_untouched(self):
        self.assertEqual(self.t('agarbatti yaar bolon'), 'agarbatti yaar bolon')

    def test_case_insensitive(self):
        for word in ('AGAR', 'Agar', 'agar', 'aGaR'):
            self.assertEqual(self.t(word), 'if')

    def test_text_without_tokens_unchanged(self):
        src = "let x = 1;\n  // comment stays\nconsole.log(x);\n"
        self.assertEqual(self.t(src), src)

    def test_arabic_semicolon_normalized(self):
        self.assertEqual(self.t('bolo x = 1؛'), 'let x = 1;')
        self.assertEqual(self.t('؛؛'), ';;')

    def test_unicode_punctuation_is_a_boundary(self):
        self.assertEqual(self.t('«agar»'), '«if»')
        self.assertEqual(self.t('likho،'), 'console.log،')

    def test_deterministic(self):
        src = "agar (x bara 3 aur nahin y) { wapas seedha; } warna { wapas ghalat; }"
        self.assertEqual(self.t(src), self.t(src))
        self.assertEqual(self.t(src), "if (x > 3 && ! y) { return true; } else { return false; }")

    def test_end_to_end_example(self):
        src = "likho('hi'); bolo n = 5; agar (n bara 3) { likho('big'); }"
        self.assertEqual(
            self.t(src),
            "console.log('hi'); let n = 5; if (n > 3) { console.log('big'); }",
        )

    def test_extension_changes_output(self):
        self.table.extend({'chapo': 'document.write'})
        self.assertEqual(self.t("chapo('x')"), "document.write('x')")
        self.table.extend({'likho': 'print'})
        self.assertEqual(self.t("likho(1)"), "print(1)")
        self.assertEqual(list(self.table).count('likho'), 1)

    def test_rejects_non_string(self):
        with self.assertRaises(TypeError):
            transpile(None, self.table)


if __name__ == '__main__':
    unittest.main()
