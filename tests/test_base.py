import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from rich.console import Console

from ask_llm import AskCommand, AskLlmSettings, ChatEndpointService, DefaultsStore


class BaseAskLlmTest(unittest.TestCase):
    def setUp(self):
        # Temporary home directory so shell profiles are never the real ones
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.home = Path(self.tmp_dir.name)

        # Process environment stand-in
        self.environ = {}
        self.store = DefaultsStore(environ=self.environ, home=self.home, windows=False)

        # Console writing to a buffer so output can be asserted on
        self.output = io.StringIO()
        self.console = Console(file=self.output, width=200, color_system=None)

        # The spinner would write to the real stdout
        self.spinner_patcher = patch("ask_llm.cli.Spinner")
        self.mock_spinner_cls = self.spinner_patcher.start()

        # Mock the OpenAI client
        self.mock_client = Mock()
        self.service = ChatEndpointService(AskLlmSettings(api_key="test-key"), client=self.mock_client)

        self.command = AskCommand(self.service, self.store, self.console)

    def tearDown(self):
        self.spinner_patcher.stop()
        self.tmp_dir.cleanup()

    def set_completion(self, content):
        self.mock_client.chat.completions.create.return_value = Mock(
            choices=[Mock(message=Mock(content=content))]
        )

    def sent_request(self):
        """Return (model, message) of the single chat completion call."""
        self.mock_client.chat.completions.create.assert_called_once()
        kwargs = self.mock_client.chat.completions.create.call_args.kwargs
        return kwargs["model"], kwargs["messages"][0]["content"]

    @property
    def printed(self):
        return self.output.getvalue()
