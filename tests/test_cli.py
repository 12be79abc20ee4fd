"""
命令行入口测试
"""

import json
import shutil

import pytest

import main as cli
from config import get_settings
from config.settings import DEFAULT_DATA_DIR
from core.types import ChatMode
from services.bootstrap import create_assistant, create_services
from services.chat_client import ModelReply, ToolCall


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """带菜单文件的临时数据目录"""
    shutil.copy(DEFAULT_DATA_DIR / "menu.json", tmp_path / "menu.json")
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


def scripted_input(*lines):
    pending = list(lines)

    def read(prompt=""):
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read


class TestCommands:
    """子命令测试"""

    def test_menu(self, data_dir, capsys):
        assert cli.main(["menu"]) == 0
        output = capsys.readouterr().out
        assert "阿薩姆紅茶" in output
        assert "🍵 純茶" in output

    def test_missing_menu(self, data_dir, capsys):
        """测试菜单无法加载时返回 1"""
        (data_dir / "menu.json").unlink()
        assert cli.main(["menu"]) == 1
        assert "程式發生錯誤" in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert cli.main([]) == 1

    def test_production_empty(self, data_dir, capsys):
        assert cli.main(["production", "list"]) == 0
        assert "目前沒有製作訂單" in capsys.readouterr().out

    def test_production_update_unknown(self, data_dir, capsys):
        assert cli.main(["production", "update", "nope", "completed"]) == 1
        assert "找不到訂單：nope" in capsys.readouterr().out

    def test_production_update_invalid_status(self, data_dir, capsys):
        assert cli.main(["production", "update", "nope", "bogus"]) == 1
        assert "無效的製作狀態：bogus" in capsys.readouterr().out

    def test_production_show_missing(self, data_dir):
        assert cli.main(["production", "show", "nope"]) == 1


class TestChatLoop:
    """对话循环测试"""

    @pytest.fixture
    def bundle(self, data_dir):
        return create_services()

    def test_exit(self, bundle, fake_client, capsys):
        assistant = create_assistant(bundle, client=fake_client)
        assert cli.run_chat(assistant, ChatMode.TOOLS, read=scripted_input("quit")) == 0
        assert fake_client.calls == []
        assert "再見" in capsys.readouterr().out

    def test_text_mode_order_and_payment(self, bundle, fake_client, data_dir, capsys):
        """测试文本模式下单、选择支付方式、转单"""
        fake_client.queue(ModelReply(content=(
            '好的！{"type": "complete", "order": {"item": "阿薩姆紅茶", "size": "M", '
            '"quantity": 2, "ice": "去冰", "sugar": "無糖", "addOn": null}}'
        )))
        assistant = create_assistant(bundle, client=fake_client)

        cli.run_chat(assistant, ChatMode.TEXT, read=scripted_input("兩杯中杯阿薩姆", "2", "exit"))

        output = capsys.readouterr().out
        assert "💰 訂單總金額：70 元" in output
        assert "訂單處理完成" in output
        production = json.loads((data_dir / "production.json").read_text(encoding="utf-8"))
        assert production[0]["paymentInfo"] == {"method": "現金", "amount": 70, "status": "completed"}
        assert production[0]["notes"] == "🍃 無糖飲品"

    def test_text_mode_invalid_choice(self, bundle, fake_client, data_dir, capsys):
        fake_client.queue(ModelReply(content=(
            '{"type": "complete", "order": {"item": "阿薩姆紅茶", "size": "M", '
            '"quantity": 1, "ice": "去冰", "sugar": "無糖"}}'
        )))
        assistant = create_assistant(bundle, client=fake_client)

        cli.run_chat(assistant, ChatMode.TEXT, read=scripted_input("一杯", "9"))

        assert "無效的支付方式選擇" in capsys.readouterr().out
        assert not (data_dir / "payments.json").exists()

    def test_tool_mode_shows_order(self, bundle, fake_client, capsys):
        fake_client.queue(
            ModelReply(tool_calls=[ToolCall("call_0", "process_order", {
                "item": "阿薩姆紅茶", "size": "L", "quantity": 1, "ice": "少冰", "sugar": "半糖"
            })]),
            ModelReply(content="訂單建立好了，請問怎麼付款？"),
        )
        assistant = create_assistant(bundle, client=fake_client)

        cli.run_chat(assistant, ChatMode.TOOLS, read=scripted_input("一杯大杯阿薩姆"))

        output = capsys.readouterr().out
        assert "📝 訂單已記錄！" in output
        assert "🤖 AI: 訂單建立好了，請問怎麼付款？" in output
