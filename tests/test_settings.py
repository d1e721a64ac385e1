import os
import tempfile
import unittest
from pathlib import Path

from ask_llm import AskCommandSettings, AskLlmSettings
from ask_llm.core.config import DEFAULT_API_ENDPOINT


class TestAskLlmSettings(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.home = Path(self.tmp_dir.name)

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_from_environment(self):
        settings = AskLlmSettings.from_environment(
            {"ASKLLM_API_KEY": " key ", "ASKLLM_API_ENDPOINT": " https://api.openai.com/v1 "},
            home=self.home,
        )
        self.assertEqual(settings.api_key, "key")
        self.assertEqual(settings.api_endpoint, "https://api.openai.com/v1")
        self.assertTrue(settings.is_valid)

    def test_default_endpoint(self):
        settings = AskLlmSettings.from_environment({"ASKLLM_API_KEY": "key", "ASKLLM_API_ENDPOINT": "  "}, home=self.home)
        self.assertEqual(settings.api_endpoint, DEFAULT_API_ENDPOINT)

    def test_missing_key_is_invalid(self):
        settings = AskLlmSettings.from_environment({}, home=self.home)
        self.assertEqual(settings.api_key, "")
        self.assertFalse(settings.is_valid)

    def test_relative_endpoint_is_invalid(self):
        self.assertFalse(AskLlmSettings(api_key="key", api_endpoint="localhost/v1").is_valid)

    def test_key_read_from_shell_profile(self):
        """Fallback to the profile when the key isn't in the environment"""
        (self.home / ".zshrc").write_text("export ASKLLM_API_KEY='sk-from-profile'\n")
        settings = AskLlmSettings.from_environment({}, home=self.home)
        self.assertEqual(settings.api_key, "sk-from-profile")


class TestAskCommandSettings(unittest.TestCase):
    def test_valid_with_prompt(self):
        result = AskCommandSettings(prompt="hi", model="m").validate()
        self.assertTrue(result.successful)
        self.assertIsNone(result.message)

    def test_requires_prompt_or_input_file(self):
        for prompt in ("", "   "):
            with self.subTest(prompt=prompt):
                result = AskCommandSettings(prompt=prompt, model="m").validate()
                self.assertFalse(result.successful)
                self.assertIn("--input-file", result.message)

    def test_input_file_must_exist(self):
        result = AskCommandSettings(model="m", input_file=os.path.join("no", "such", "file.txt")).validate()
        self.assertEqual(result.message, "The file specified by --input-file does not exist.")

    def test_existing_input_file(self):
        with tempfile.NamedTemporaryFile() as handle:
            self.assertTrue(AskCommandSettings(model="m", input_file=handle.name).validate().successful)

    def test_requires_model(self):
        for model in ("", "   "):
            with self.subTest(model=model):
                result = AskCommandSettings(prompt="hi", model=model).validate()
                self.assertEqual(result.message, "A model must be specified using --model.")


if __name__ == "__main__":
    unittest.main()
