import pytest

from desktop_ui_mcp.prompts import PromptProvider


@pytest.fixture
def prompts():
    return PromptProvider()


def test_list(prompts):
    listed = {p.name: p for p in prompts.list()}

    assert set(listed) == {
        "findWindow", "windowInfo", "fillForm", "submitForm",
        "automateTask", "monitorWindow", "takeScreenshot",
    }
    assert [a.name for a in listed["findWindow"].arguments] == ["windowTitle", "action"]
    assert listed["takeScreenshot"].arguments[1].required is False


def test_find_window(prompts):
    result = prompts.get("findWindow", {"windowTitle": "Notepad", "action": "activate"})

    assert result.description == 'Find a window with title "Notepad" and activate (bring to front) it'
    assert len(result.messages) == 1
    assert result.messages[0].role == "user"
    assert result.messages[0].content.text.startswith(
        'I need to find a window with the title "Notepad" and activate (bring to front) it.'
    )


def test_fill_form_includes_fields(prompts):
    result = prompts.get("fillForm", {"windowTitle": "Login", "formFields": "user=me"})

    assert "user=me" in result.messages[0].content.text


@pytest.mark.parametrize(
    "arguments, expected",
    [
        ({"target": "fullscreen"}, "I need to take a screenshot of the entire screen."),
        ({"target": "window", "windowTitle": "Calc"}, 'I need to take a screenshot of a window with the title "Calc".'),
        ({"target": "region"}, "I need to take a screenshot of a specific region of the screen."),
        ({"target": "window"}, "I need to take a screenshot."),
    ],
)
def test_take_screenshot(prompts, arguments, expected):
    result = prompts.get("takeScreenshot", arguments)

    assert result.messages[0].content.text.startswith(expected)


def test_invalid_action(prompts):
    with pytest.raises(ValueError, match="Invalid action"):
        prompts.get("findWindow", {"windowTitle": "Notepad", "action": "explode"})


def test_missing_argument(prompts):
    with pytest.raises(ValueError, match="windowTitle"):
        prompts.get("windowInfo", {})


def test_unknown_prompt(prompts):
    with pytest.raises(ValueError, match="Unknown prompt"):
        prompts.get("nope", {})
