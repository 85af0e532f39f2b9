import unittest
import json
import os
import tempfile

from roman_urdu.mapper.engine import MappingTable, compile_rules, load_vocabulary
from roman_urdu.mapper.vocabulary import DEFAULT_ENTRIES


class TestMappingTable(unittest.TestCase):
    def setUp(self):
        self.table = MappingTable.with_defaults()

    def test_defaults_keep_insertion_order(self):
        self.assertEqual(self.table.items(), list(DEFAULT_ENTRIES))
        self.assertEqual(self.table['likho'], 'console.log')
        self.assertEqual(list(self.table)[-1], 'ke_liye')

    def test_one_rule_per_entry(self):
        self.assertEqual(len(self.table.rules), len(self.table))
        self.assertEqual([r.token for r in self.table.rules], list(self.table))

    def test_extend_overwrites_in_place(self):
        before = list(self.table)
        self.table.extend({'agar': 'if /*agar*/'})
        self.assertEqual(list(self.table), before)
        self.assertEqual(self.table['agar'], 'if /*agar*/')
        self.assertEqual(len(self.table.rules), len(before))
        self.assertEqual(self.table.rules[1].replacement, 'if /*agar*/')

    def test_extend_appends_new_tokens(self):
        self.table.extend({'chapo': 'document.write', 'ginti_karo': 'for'})
        self.assertEqual(list(self.table)[-2:], ['chapo', 'ginti_karo'])
        self.assertEqual(len(self.table.rules), len(DEFAULT_ENTRIES) + 2)
        self.assertIn('chapo', self.table)

    def test_extend_rejects_bad_entries_without_partial_update(self):
        with self.assertRaises(ValueError):
            self.table.extend([('chapo', 'document.write'), ('', 'x')])
        self.assertNotIn('chapo', self.table)
        with self.assertRaises(ValueError):
            self.table.extend({'chapo': 5})
        self.assertEqual(len(self.table.rules), len(DEFAULT_ENTRIES))

    def test_to_dict_is_a_copy(self):
        d = self.table.to_dict()
        d['agar'] = 'nope'
        self.assertEqual(self.table['agar'], 'if')

    def test_rules_are_case_insensitive_whole_words(self):
        rule = compile_rules([('agar', 'if')])[0]
        self.assertEqual(rule.apply('AGAR agar Agar agarbatti'), 'if if if agarbatti')

    def test_metacharacters_match_literally(self):
        rule = compile_rules([('x.y', 'z')])[0]
        self.assertEqual(rule.apply('x.y xzy'), 'z xzy')

    def test_replacement_backslashes_are_literal(self):
        rule = compile_rules([('slash', r'a\1b')])[0]
        self.assertEqual(rule.apply('slash'), r'a\1b')


class TestVocabularyFiles(unittest.TestCase):
    def _write(self, data) -> str:
        fd, path = tempfile.mkstemp(suffix='.json')
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f)
        self.addCleanup(os.remove, path)
        return path

    def test_load_vocabulary_preserves_order(self):
        path = self._write({'entries': [
            {'token': 'chapo', 'replacement': 'document.write'},
            {'token': 'toro', 'replacement': 'break'},
        ]})
        self.assertEqual(load_vocabulary(path), [('chapo', 'document.write'), ('toro', 'break')])

    def test_from_json_path_extends_defaults(self):
        path = self._write({'entries': [{'token': 'toro', 'replacement': 'break'}]})
        table = MappingTable.from_json_path(path)
        self.assertEqual(table['toro'], 'break')
        self.assertEqual(len(table), len(DEFAULT_ENTRIES) + 1)
        bare = MappingTable.from_json_path(path, defaults=False)
        self.assertEqual(bare.items(), [('toro', 'break')])

    def test_malformed_vocabulary(self):
        with self.assertRaises(ValueError):
            load_vocabulary(self._write({'entries': {'toro': 'break'}}))
        with self.assertRaises(ValueError):
            load_vocabulary(self._write({'entries': [{'replacement': 'break'}]}))


if __name__ == '__main__':
    unittest.main()
