import argparse
import json
import os
import sys
import tempfile
import unittest
from unittest.mock import patch

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from xml2py.xml2py import main

def get_xml():
    """Provides the XML input file path."""
    xml_path = os.path.join(tempfile.gettempdir(), 'xml2py', 'main_sample.xml')
    os.makedirs(os.path.dirname(xml_path), exist_ok=True)
    with open(xml_path, 'w', encoding='utf-8') as f:
        f.write('<order id="1"><line sku="a"/><line sku="b"/><note>hi</note></order>')
    return xml_path

class TestMain(unittest.TestCase):

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None))
    def test_main_no_command(self, mock_parse_args):
        """Test main function with no command."""
        with patch('builtins.print'):
            main()

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None, version=True))
    def test_main_version(self, mock_parse_args):
        """Test main function printing the version."""
        with patch('builtins.print') as mock_print:
            main()
        mock_print.assert_called_once()
        self.assertTrue(mock_print.call_args[0][0].startswith('xml2py '))

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='x2py', input=[get_xml()], out=tempfile.gettempdir() + '/xml2py/output.py', sort_types=True, module_header=True, sample_size=0))
    def test_main_x2py_command(self, mock_parse_args):
        """Test main function with x2py command."""
        main()
        with open(tempfile.gettempdir() + '/xml2py/output.py', 'r', encoding='utf-8') as f:
            code = f.read()
        self.assertIn('class Order:', code)
        self.assertIn('Line: List[Order_Line]', code)

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='x2py', input=[get_xml()], out=None, sort_types=False, module_header=False, sample_size=0))
    def test_main_x2py_command_stdout(self, mock_parse_args):
        """Test main function with x2py command writing to stdout."""
        with patch('sys.stdout.write') as mock_write:
            main()
        code = ''.join(call[0][0] for call in mock_write.call_args_list)
        self.assertTrue(code.startswith('@dataclass'))

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='x2tree', input=[get_xml()], out=tempfile.gettempdir() + '/xml2py/output.json', sample_size=0))
    def test_main_x2tree_command(self, mock_parse_args):
        """Test main function with x2tree command."""
        main()
        with open(tempfile.gettempdir() + '/xml2py/output.json', 'r', encoding='utf-8') as f:
            tree = json.load(f)
        self.assertEqual(tree[0]['name'], 'order')
        self.assertEqual([c['name'] for c in tree[0]['children']], ['line', 'note'])

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command='x2py', input=['/nonexistent/file.xml'], out=tempfile.gettempdir() + '/xml2py/never.py'))
    def test_main_error_exits(self, mock_parse_args):
        """Test that errors end the program with exit code 1."""
        with patch('builtins.print'):
            with self.assertRaises(SystemExit) as cm:
                main()
        self.assertEqual(cm.exception.code, 1)

if __name__ == '__main__':
    unittest.main()
