import asyncio

import pytest

import app.config
from app.errors import AuthCancelled, AuthInProgress, CredentialError
from app.utils.auth import AuthMode, CredentialForm


@pytest.mark.asyncio
async def test_success_invokes_callback_once():
    calls = []
    form = CredentialForm(calls.append)

    result = await form.submit("john@example.com", "secret1")

    assert result.ok
    assert result.user.name == "john"
    assert calls == [result.user]
    assert not form.is_loading


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password,name,mode",
    [
        ("", "secret1", None, AuthMode.LOGIN),
        ("john@example.com", "12345", None, AuthMode.LOGIN),
        ("jane@example.com", "secret1", "", AuthMode.REGISTER),
    ],
)
async def test_invalid_submission_never_invokes_callback(email, password, name, mode):
    calls = []
    form = CredentialForm(calls.append)

    result = await form.submit(email, password, name, mode)

    assert not result.ok
    assert isinstance(result.error, CredentialError)
    assert calls == []
    assert not form.is_loading


@pytest.mark.asyncio
async def test_second_submission_while_pending_is_refused(monkeypatch):
    monkeypatch.setattr(app.config, "AUTH_DELAY_SECONDS", 10)
    calls = []
    form = CredentialForm(calls.append)

    first = asyncio.create_task(form.submit("john@example.com", "secret1"))
    await asyncio.sleep(0)
    assert form.is_loading

    second = await form.submit("jane@example.com", "secret1")
    assert isinstance(second.error, AuthInProgress)

    form.cancel()
    await first
    assert calls == []


@pytest.mark.asyncio
async def test_cancel_pending_submission(monkeypatch):
    monkeypatch.setattr(app.config, "AUTH_DELAY_SECONDS", 10)
    calls = []
    form = CredentialForm(calls.append)

    submission = asyncio.create_task(form.submit("john@example.com", "secret1"))
    await asyncio.sleep(0)

    assert form.cancel() is True
    result = await submission

    assert not result.ok
    assert isinstance(result.error, AuthCancelled)
    assert calls == []
    assert not form.is_loading
    assert form.cancel() is False


@pytest.mark.asyncio
async def test_cancelling_the_caller_propagates(monkeypatch):
    monkeypatch.setattr(app.config, "AUTH_DELAY_SECONDS", 10)
    calls = []
    form = CredentialForm(calls.append)

    submission = asyncio.create_task(form.submit("john@example.com", "secret1"))
    await asyncio.sleep(0)
    submission.cancel()

    with pytest.raises(asyncio.CancelledError):
        await submission
    assert calls == []
    assert not form.is_loading


@pytest.mark.asyncio
async def test_form_is_reusable_after_failure():
    calls = []
    form = CredentialForm(calls.append)

    await form.submit("john@example.com", "123")
    result = await form.submit("john@example.com", "secret1")

    assert result.ok
    assert len(calls) == 1
