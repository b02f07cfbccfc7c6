"""Tests for Pydantic schema models."""

import pytest
from pydantic import ValidationError
from dotbase_installer.engine.schema import Choice, Question, QuestionFlow


def test_question_minimal_valid():
    """Question can be created with minimal required fields."""
    question = Question(
        id='HOSTNAME',
        type='string',
        prompt='Which hostname will dot.base run on?',
    )

    assert question.id == 'HOSTNAME'
    assert question.type == 'string'
    assert question.validator is None
    assert question.when is None
    assert question.default_value is None
    assert question.options == []


def test_question_with_all_fields():
    """Question can be created with all optional fields."""
    question = Question(
        id='EXTENSIONS_TO_USE',
        type='multi_enum',
        prompt='Which extensions do you want to use?',
        hint='Comma separated',
        section='Extensions',
        default_value=['ldapServer'],
        when='USE_EXTENSIONS',
        options=[{'value': 'ldapServer', 'label': 'LDAP Single Sign-on'}],
    )

    assert question.default_value == ['ldapServer']
    assert question.when == 'USE_EXTENSIONS'
    assert question.option_values == ['ldapServer']
    assert question.options[0].display == 'LDAP Single Sign-on'


def test_question_rejects_unknown_type():
    """Only the four input kinds are accepted."""
    with pytest.raises(ValidationError):
        Question(id='X', type='password', prompt='?')


def test_enum_question_requires_options():
    """Enum kinds need a closed option set."""
    with pytest.raises(ValidationError):
        Question(id='X', type='enum', prompt='?')


def test_question_rejects_unknown_fields():
    """Typos in flow files are caught."""
    with pytest.raises(ValidationError):
        Question(id='X', type='string', prompt='?', validate='hostname')


def test_choice_display_falls_back_to_value():
    """Choice without a label shows its value."""
    assert Choice(value='ldapServer').display == 'ldapServer'


def test_flow_requires_name_version_description():
    """QuestionFlow requires its header fields."""
    with pytest.raises(ValidationError):
        QuestionFlow(questions=[])

    flow = QuestionFlow(name='install', version='1.0', description='Install')
    assert flow.questions == []
