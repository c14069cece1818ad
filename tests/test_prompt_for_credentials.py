"""Unit tests for the schema-driven credential prompts."""

import base64
import os
from dataclasses import dataclass

import pytest

from mobci.credentials.prompt_for_credentials import (
    CredentialSchema,
    ProvideMethodQuestion,
    Question,
    QuestionType,
    ask_for_user_provided_async,
    get_credentials_from_user_async,
    produce_absolute_path,
)

AUTO = 1  # "Let the build service handle the process"
PROVIDE = 2  # "I want to upload my own file"

WARNING_SNIPPET = "we won't be able to make sure that your credentials are valid"


def _schema(**overrides) -> CredentialSchema:
    params = dict(
        name="Test Credentials",
        questions=[
            Question(field="username", question="Username", type=QuestionType.STRING),
            Question(field="password", question="Password", type=QuestionType.PASSWORD),
        ],
    )
    params.update(overrides)
    return CredentialSchema(**params)


# ---------------------------------------------------------------------------
# ask_for_user_provided_async
# ---------------------------------------------------------------------------


class TestAskForUserProvided:
    @pytest.mark.asyncio
    async def test_opt_out_returns_none_without_further_questions(self, scripted_prompt):
        fake = scripted_prompt(AUTO)
        result = await ask_for_user_provided_async(_schema(), {"username": "ada"})
        assert result is None
        assert len(fake.calls) == 1

    @pytest.mark.asyncio
    async def test_opt_in_collects_every_field(self, scripted_prompt):
        scripted_prompt(PROVIDE, "ada", "hunter2")
        result = await ask_for_user_provided_async(_schema())
        assert result == {"username": "ada", "password": "hunter2"}

    @pytest.mark.asyncio
    async def test_default_question_mentions_schema_name(self, scripted_prompt, capsys):
        scripted_prompt(AUTO)
        await ask_for_user_provided_async(_schema())
        assert "Will you provide your own Test Credentials?" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_provide_method_question_overrides_wording(self, scripted_prompt, capsys):
        scripted_prompt(AUTO)
        schema = _schema(
            provide_method_question=ProvideMethodQuestion(
                question="Bring your own?",
                auto_generated="Generate it",
                user_provided="Upload it",
            )
        )
        await ask_for_user_provided_async(schema)
        out = capsys.readouterr().out
        assert "Bring your own?" in out
        assert "1) Generate it" in out
        assert "2) Upload it" in out

    @pytest.mark.asyncio
    async def test_warning_is_shown_once_per_process(self, scripted_prompt, capsys):
        scripted_prompt(PROVIDE, "ada", "pw1", PROVIDE, "bob", "pw2")
        await ask_for_user_provided_async(_schema())
        await ask_for_user_provided_async(_schema())
        err = capsys.readouterr().err
        assert err.count(WARNING_SNIPPET) == 1
        assert "provisioning profile" in err

    @pytest.mark.asyncio
    async def test_warning_not_shown_on_opt_out(self, scripted_prompt, capsys):
        scripted_prompt(AUTO)
        await ask_for_user_provided_async(_schema())
        assert WARNING_SNIPPET not in capsys.readouterr().err


# ---------------------------------------------------------------------------
# get_credentials_from_user_async
# ---------------------------------------------------------------------------


class TestGetCredentialsFromUser:
    @pytest.mark.asyncio
    async def test_bundle_has_exactly_the_schema_fields(self, scripted_prompt):
        scripted_prompt("ada", "pw")
        schema = _schema()
        result = await get_credentials_from_user_async(schema, {})
        assert set(result) == {q.field for q in schema.questions}
        assert all(result.values())

    @pytest.mark.asyncio
    async def test_same_answers_give_equal_bundles(self, scripted_prompt):
        scripted_prompt("ada", "pw", "ada", "pw")
        schema = _schema()
        first = await get_credentials_from_user_async(schema, {})
        second = await get_credentials_from_user_async(schema, {})
        assert first == second

    @pytest.mark.asyncio
    async def test_empty_string_is_reprompted(self, scripted_prompt, capsys):
        fake = scripted_prompt("", "", "ada", "pw")
        result = await get_credentials_from_user_async(_schema(), {})
        assert result["username"] == "ada"
        username_prompts = [text for text, _ in fake.calls if text == "Username"]
        assert len(username_prompts) == 3
        assert capsys.readouterr().err.count("Invalid input.") == 2

    @pytest.mark.asyncio
    async def test_empty_password_is_reprompted(self, scripted_prompt, capsys):
        fake = scripted_prompt("ada", "", "pw")
        result = await get_credentials_from_user_async(_schema(), {})
        assert result["password"] == "pw"
        password_prompts = [kwargs for text, kwargs in fake.calls if text == "Password"]
        assert len(password_prompts) == 2
        assert all(kwargs["hide_input"] is True for kwargs in password_prompts)
        assert capsys.readouterr().err.count("Invalid input.") == 1

    @pytest.mark.asyncio
    async def test_initial_value_only_prefills_string_questions(self, scripted_prompt):
        fake = scripted_prompt("ada", "pw")
        await get_credentials_from_user_async(_schema(), {"username": "ada", "password": "leak"})
        (_, username_kwargs), (_, password_kwargs) = fake.calls
        assert username_kwargs["default"] == "ada"
        assert password_kwargs["default"] == ""
        assert password_kwargs["hide_input"] is True

    @pytest.mark.asyncio
    async def test_transform_result_builds_typed_bundle(self, scripted_prompt):
        @dataclass
        class Login:
            username: str
            password: str

        async def to_login(answers):
            return Login(**answers)

        scripted_prompt("ada", "pw")
        result = await get_credentials_from_user_async(_schema(transform_result_async=to_login), {})
        assert result == Login(username="ada", password="pw")


# ---------------------------------------------------------------------------
# File questions
# ---------------------------------------------------------------------------


class TestFileQuestions:
    @pytest.mark.asyncio
    async def test_base64_file_answer_is_file_content(self, scripted_prompt, tmp_path):
        blob = bytes(range(256)) * 4
        keystore = tmp_path / "release.keystore"
        keystore.write_bytes(blob)
        scripted_prompt(str(keystore))
        schema = _schema(
            questions=[Question(field="keystore", question="Keystore", type=QuestionType.FILE, base64_encode=True)]
        )
        result = await get_credentials_from_user_async(schema, {})
        assert result["keystore"] == base64.b64encode(blob).decode("ascii")

    @pytest.mark.asyncio
    async def test_text_file_answer_is_file_text(self, scripted_prompt, tmp_path):
        (tmp_path / "key.txt").write_text("PRIVATE KEY", encoding="utf-8")
        scripted_prompt(str(tmp_path / "key.txt"))
        schema = _schema(questions=[Question(field="key", question="Key", type=QuestionType.FILE)])
        result = await get_credentials_from_user_async(schema, {})
        assert result == {"key": "PRIVATE KEY"}

    @pytest.mark.asyncio
    async def test_relative_path_resolves_against_cwd(self, scripted_prompt, tmp_path, monkeypatch):
        (tmp_path / "certs").mkdir()
        (tmp_path / "certs" / "cert.pem").write_text("CERT", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        scripted_prompt("certs/cert.pem")
        schema = _schema(questions=[Question(field="cert", question="Cert", type=QuestionType.FILE)])
        result = await get_credentials_from_user_async(schema, {})
        assert result == {"cert": "CERT"}

    @pytest.mark.asyncio
    async def test_missing_file_and_directory_are_reprompted(self, scripted_prompt, tmp_path, capsys):
        real = tmp_path / "real.txt"
        real.write_text("ok", encoding="utf-8")
        fake = scripted_prompt(str(tmp_path / "nope.txt"), str(tmp_path), str(real))
        schema = _schema(questions=[Question(field="f", question="File", type=QuestionType.FILE)])
        result = await get_credentials_from_user_async(schema, {"f": "ignored"})
        assert result == {"f": "ok"}
        assert len(fake.calls) == 3
        assert all(kwargs["default"] == "" for _, kwargs in fake.calls)
        err = capsys.readouterr().err
        assert "File does not exist." in err
        assert "Input is not a file." in err


class TestProduceAbsolutePath:
    def test_tilde_expands_to_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert produce_absolute_path("~/foo.txt") == os.path.join(str(tmp_path), "foo.txt")

    def test_relative_resolves_against_cwd(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        expected = os.path.join(os.getcwd(), "relative", "foo.txt")
        assert produce_absolute_path("relative/foo.txt") == expected

    def test_absolute_is_unchanged(self):
        assert produce_absolute_path("/abs/foo.txt") == "/abs/foo.txt"

    def test_surrounding_whitespace_is_trimmed(self):
        assert produce_absolute_path("  /abs/foo.txt \n") == "/abs/foo.txt"


class TestSchemaInvariants:
    def test_duplicate_fields_are_rejected(self):
        with pytest.raises(ValueError, match="Duplicate fields"):
            _schema(
                questions=[
                    Question(field="a", question="A", type=QuestionType.STRING),
                    Question(field="a", question="A again", type=QuestionType.PASSWORD),
                ]
            )

    def test_base64_encode_requires_file_type(self):
        with pytest.raises(ValueError, match="base64_encode"):
            Question(field="a", question="A", type=QuestionType.STRING, base64_encode=True)
