import json

from smartconvert.insight.example_client_adapter import ExampleClientAdapter


class TestExampleClientAdapter:
    def test_summary_is_first_text_line(self) -> None:
        raw = ExampleClientAdapter().create_chat_completion(
            model="example",
            temperature=0.0,
            prompt="Intro\n\nText Content:\n\nPage 1: Hello there\nPage 2: More",
            json_schema={},
        )
        assert json.loads(raw) == {"summary": "Page 1: Hello there", "keywords": []}

    def test_prompt_without_marker_yields_empty_summary(self) -> None:
        raw = ExampleClientAdapter().create_chat_completion(
            model="example", temperature=0.0, prompt="nothing", json_schema={}
        )
        assert json.loads(raw)["summary"] == ""
