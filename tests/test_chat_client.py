"""
模型客户端测试
"""

from types import SimpleNamespace

import pytest

from config import LLMSettings
from infrastructure.exceptions import (
    ModelConnectionError,
    ModelNotFoundError,
    ModelResponseError,
    classify_openai_error,
)
from services.chat_client import ChatClient, ModelReply, ToolCall, decode_arguments


def make_response(content="", tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_tool_call(call_id, name, arguments):
    return SimpleNamespace(id=call_id, function=SimpleNamespace(name=name, arguments=arguments))


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.response


def make_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


class TestChatClient:
    """ChatClient 测试"""

    @pytest.fixture
    def settings(self):
        return LLMSettings(model="llama3.2", temperature=0.2)

    def test_plain_reply(self, settings):
        completions = FakeCompletions(make_response("歡迎光臨！"))
        client = ChatClient(settings, client=make_client(completions))

        reply = client.chat([{"role": "user", "content": "你好"}])

        assert reply == ModelReply(content="歡迎光臨！")
        assert completions.kwargs["model"] == "llama3.2"
        assert completions.kwargs["temperature"] == 0.2
        assert "tools" not in completions.kwargs

    def test_tool_calls(self, settings):
        """测试解析工具调用"""
        calls = [make_tool_call("call_1", "calculate_total",
                                '{"item": "阿薩姆紅茶", "size": "L", "quantity": 2}')]
        completions = FakeCompletions(make_response(None, calls))
        client = ChatClient(settings, client=make_client(completions))

        reply = client.chat([], tools=[{"type": "function"}])

        assert completions.kwargs["tool_choice"] == "auto"
        assert reply.content == ""
        assert reply.tool_calls == [ToolCall(
            id="call_1", name="calculate_total",
            arguments={"item": "阿薩姆紅茶", "size": "L", "quantity": 2}
        )]

    def test_model_override(self, settings):
        completions = FakeCompletions(make_response("好的"))
        ChatClient(settings, client=make_client(completions)).chat([], model="gemma3")
        assert completions.kwargs["model"] == "gemma3"

    def test_missing_call_id(self, settings):
        calls = [make_tool_call(None, "transfer_to_production", {})]
        completions = FakeCompletions(make_response("", calls))
        reply = ChatClient(settings, client=make_client(completions)).chat([])
        assert reply.tool_calls[0].id == "call_0"

    def test_no_choices(self, settings):
        completions = FakeCompletions(SimpleNamespace(choices=[]))
        with pytest.raises(ModelResponseError):
            ChatClient(settings, client=make_client(completions)).chat([])

    def test_connection_error(self, settings):
        """测试连接失败转换为 ModelConnectionError"""
        error_cls = type("APIConnectionError", (Exception,), {})
        completions = FakeCompletions(error=error_cls("Connection refused"))
        with pytest.raises(ModelConnectionError):
            ChatClient(settings, client=make_client(completions)).chat([])


class TestReplyMessages:
    """对话历史消息测试"""

    def test_reply_to_message(self):
        reply = ModelReply(content="", tool_calls=[ToolCall("call_1", "process_order", {"item": "珍珠奶茶"})])
        message = reply.to_message()
        assert message["role"] == "assistant"
        assert message["tool_calls"][0]["function"]["name"] == "process_order"
        assert message["tool_calls"][0]["function"]["arguments"] == '{"item": "珍珠奶茶"}'

    def test_plain_message_has_no_tool_calls(self):
        assert ModelReply(content="你好").to_message() == {"role": "assistant", "content": "你好"}


class TestDecodeArguments:
    """工具参数解析测试"""

    def test_json_string(self):
        assert decode_arguments('{"amount": 90}') == {"amount": 90}

    def test_dict(self):
        assert decode_arguments({"amount": 90}) == {"amount": 90}

    def test_empty(self):
        assert decode_arguments("") == {}
        assert decode_arguments(None) == {}

    @pytest.mark.parametrize("raw", ["{broken", "[1, 2]"])
    def test_invalid(self, raw):
        with pytest.raises(ModelResponseError):
            decode_arguments(raw)


class TestClassifyError:
    """异常分类测试"""

    def test_not_found(self):
        error = type("NotFoundError", (Exception,), {})("model not found")
        result = classify_openai_error(error, "llama3.2")
        assert isinstance(result, ModelNotFoundError)
        assert result.details["model"] == "llama3.2"

    def test_server_error(self):
        error = type("InternalServerError", (Exception,), {"status_code": 503})("unavailable")
        assert isinstance(classify_openai_error(error), ModelConnectionError)

    def test_other_error(self):
        result = classify_openai_error(ValueError("bad"))
        assert isinstance(result, ModelResponseError)
        assert result.details["error_type"] == "ValueError"
