"""Tests for entity to JSON conversion."""

from __future__ import annotations

import json
import unittest

from pwls.catalog.models import Company, Curve, Property, Tool
from pwls.catalog.serialization import (
    curve_links_of, entities_to_list, entity_to_dict, save_json,
)


class TestEntityToDict(unittest.TestCase):

    def test_field_names_follow_documents(self):
        c = Curve(mnemonic="GR", property="Gamma ray", quantity="api",
                  short_mnemonic="GR", company_code=440)
        self.assertEqual(entity_to_dict(c), {
            "mnemonic": "GR", "shortMnemonic": "GR", "companyCode": 440,
            "property": "Gamma ray", "quantity": "api", "description": None,
        })

    def test_property_parent_by_name(self):
        root = Property("Root", "d", "q", "g1")
        child = Property("Child", "d", "q", "g2")
        child.set_parent(root)
        self.assertEqual(entity_to_dict(child)["parent"], "Root")
        self.assertIsNone(entity_to_dict(root)["parent"])

    def test_tool_lists_curve_mnemonics(self):
        tool = Tool(code="T1", company_code=10)
        for m in ("RHOB", "GR"):
            tool.add_curve(Curve(mnemonic=m, property="p", quantity="q", company_code=10))
        self.assertEqual(entity_to_dict(tool)["curves"], ["GR", "RHOB"])

    def test_tool_code_field_name(self):
        self.assertEqual(entity_to_dict(Tool(code="T1", company_code=10))["toolCode"], "T1")

    def test_unknown_type(self):
        with self.assertRaises(TypeError):
            entity_to_dict(object())


class TestEntitiesToList(unittest.TestCase):

    def test_sorted_by_natural_key(self):
        companies = {Company(440, "C"), Company(10, "A"), Company(20, "B")}
        self.assertEqual([c["code"] for c in entities_to_list(companies)], [10, 20, 440])

    def test_missing_company_sorts_last(self):
        curves = [Curve("GR", "p", "q"), Curve("GR", "p", "q", company_code=20),
                  Curve("GR", "p", "q", company_code=10)]
        self.assertEqual([c["companyCode"] for c in entities_to_list(curves)], [10, 20, None])

    def test_empty(self):
        self.assertEqual(entities_to_list([]), [])

    def test_links_from_tools(self):
        tool = Tool(code="T1", company_code=10)
        tool.add_curve(Curve("GR", "p", "q", company_code=10))
        (link,) = curve_links_of([tool])
        self.assertEqual(entity_to_dict(link),
                         {"toolCode": "T1", "companyCode": 10, "curveMnemonic": "GR"})


def test_save_json(tmp_path):
    path = save_json(tmp_path / "out" / "companies.json", [Company(10, "Acmé")])
    assert json.loads(path.read_text(encoding="utf-8")) == [{"code": 10, "name": "Acmé"}]


if __name__ == "__main__":
    unittest.main()
