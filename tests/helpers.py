"""In-memory stand-ins and envelope helpers used across the test modules."""
import json


class FakeClient:
    """Records (method, path, data) and answers with queued responses.

    A queued exception instance is raised instead of returned.
    """

    def __init__(self):
        self.calls = []
        self.responses = []

    def respond(self, *values):
        self.responses.extend(values)
        return self

    async def request(self, method, path, data=None):
        self.calls.append((method, path, data))
        return self._next()

    async def fetch(self, url, params=None):
        self.calls.append(("GET", url, params))
        return self._next()

    def _next(self):
        value = self.responses.pop(0) if self.responses else {}
        if isinstance(value, BaseException):
            raise value
        return value

    @property
    def last_call(self):
        return self.calls[-1]


class ListSink:
    def __init__(self):
        self.messages = []

    def write(self, message):
        self.messages.append(message)


def result_text(result):
    content = result["toolResult"]["content"]
    assert len(content) == 1
    assert content[0]["type"] == "text"
    return content[0]["text"]


def result_json(result):
    assert result["toolResult"]["isError"] is False, result_text(result)
    return json.loads(result_text(result))


def is_error(result):
    return result["toolResult"]["isError"]
