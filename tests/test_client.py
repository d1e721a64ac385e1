import unittest
from unittest.mock import Mock, patch

import openai

from ask_llm import AskLlmSettings, ChatEndpointService, ChatRequest
from ask_llm.core.client import NO_CONTENT_MESSAGE, NOT_CONFIGURED_MESSAGE


class TestChatEndpointService(unittest.TestCase):
    def setUp(self):
        self.mock_client = Mock()
        self.service = ChatEndpointService(AskLlmSettings(api_key="key"), client=self.mock_client)

    def set_content(self, content):
        self.mock_client.chat.completions.create.return_value = Mock(
            choices=[Mock(message=Mock(content=content))]
        )

    def test_is_configured(self):
        self.assertTrue(self.service.is_configured)
        self.assertFalse(ChatEndpointService(AskLlmSettings(api_key="")).is_configured)

    def test_successful_request(self):
        self.set_content("  Hello there  \n")

        response = self.service.send_chat_request(ChatRequest("hi", "gpt-test"))

        self.assertTrue(response.success)
        self.assertEqual(response.content, "Hello there")
        self.assertEqual(response.model, "gpt-test")
        self.mock_client.chat.completions.create.assert_called_once_with(
            model="gpt-test",
            messages=[{"role": "user", "content": "hi"}],
        )

    def test_content_parts_are_joined(self):
        self.set_content([{"type": "text", "text": "first"}, {"type": "text", "text": "second"}])
        response = self.service.send_chat_request(ChatRequest("hi", "gpt-test"))
        self.assertEqual(response.content, "first\nsecond")

    def test_empty_content_is_a_failure(self):
        for content in (None, "   "):
            with self.subTest(content=content):
                self.set_content(content)
                response = self.service.send_chat_request(ChatRequest("hi", "gpt-test"))
                self.assertFalse(response.success)
                self.assertEqual(response.error_message, NO_CONTENT_MESSAGE)

    def test_no_choices_is_a_failure(self):
        self.mock_client.chat.completions.create.return_value = Mock(choices=[])
        response = self.service.send_chat_request(ChatRequest("hi", "gpt-test"))
        self.assertFalse(response.success)

    def test_api_error_becomes_failure(self):
        self.mock_client.chat.completions.create.side_effect = openai.OpenAIError("rate limited")

        response = self.service.send_chat_request(ChatRequest("hi", "gpt-test"))

        self.assertFalse(response.success)
        self.assertEqual(response.error_message, "rate limited")

    def test_not_configured(self):
        service = ChatEndpointService(AskLlmSettings(api_key=" "), client=self.mock_client)

        response = service.send_chat_request(ChatRequest("hi", "gpt-test"))

        self.assertFalse(response.success)
        self.assertEqual(response.error_message, NOT_CONFIGURED_MESSAGE)
        self.mock_client.chat.completions.create.assert_not_called()

    def test_invalid_request_raises(self):
        with self.assertRaises(ValueError):
            self.service.send_chat_request(ChatRequest("", "gpt-test"))
        with self.assertRaises(ValueError):
            self.service.send_chat_request(ChatRequest("hi", "  "))

    @patch("ask_llm.core.client.OpenAI")
    def test_client_created_from_settings(self, mock_openai):
        service = ChatEndpointService(AskLlmSettings(api_key="key", api_endpoint="https://example.com/v1"))
        mock_openai.return_value.chat.completions.create.return_value = Mock(
            choices=[Mock(message=Mock(content="ok"))]
        )

        service.send_chat_request(ChatRequest("hi", "gpt-test"))
        service.send_chat_request(ChatRequest("again", "gpt-test"))

        mock_openai.assert_called_once_with(api_key="key", base_url="https://example.com/v1")


if __name__ == "__main__":
    unittest.main()
