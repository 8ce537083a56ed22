"""
Tool Orchestrator Tests
=======================

Unit tests for the assistant exchange loop:
- Final turn with model id and token usage
- createNode parent chaining and createComponent placeholders
- Tool-result messages, argument errors and unknown tools
- Round budget, error recovery and history replay

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from agents.canvas.component_generator import COMPONENT_ERROR_HTML
from agents.canvas.tool_orchestrator import (
    GENERIC_ERROR_TEXT,
    TOO_MANY_TOOL_CALLS_TEXT,
    ToolOrchestrator,
)
from clients.llm.base import ModelResponse, ToolCall
from models.common import ChatRole, NodeKind
from models.domain.canvas import NodeDraft
from models.domain.conversation import ChatMessage
from services.infrastructure.http.error_handler import LLMServiceError


def _call(name, call_id='', **args):
    return ToolCall(name=name, args=args, id=call_id, raw_arguments=json.dumps(args))


def _user(text='hello'):
    return ChatMessage(role=ChatRole.USER, text=text)


@pytest.fixture
def llm():
    llm = Mock()
    llm.generate = AsyncMock()
    return llm


@pytest.fixture
def generator():
    generator = Mock()
    generator.generate_document = AsyncMock(return_value='<html>game</html>')
    return generator


@pytest.fixture
def orchestrator(store, llm, generator):
    return ToolOrchestrator(store, llm=llm, component_generator=generator, model='qwen', max_tool_rounds=3)


class TestFinalTurn:
    """Exchanges without tool calls"""

    @pytest.mark.asyncio
    async def test_records_model_and_usage(self, orchestrator, llm):
        llm.generate.return_value = ModelResponse(
            text_parts=['Hello', ' there'],
            usage={'prompt_tokens': 10, 'completion_tokens': 5, 'total_tokens': 15},
            model='qwen-plus-latest'
        )
        turns = await orchestrator.run_exchange(_user())

        assert [turn.role for turn in turns] == [ChatRole.USER, ChatRole.MODEL]
        assert turns[1].text == 'Hello there'
        assert turns[1].model == 'qwen-plus-latest'
        assert turns[1].token_usage.total_tokens == 15

    @pytest.mark.asyncio
    async def test_empty_final_text_appends_nothing(self, orchestrator, llm):
        llm.generate.return_value = ModelResponse(text_parts=['  '])
        turns = await orchestrator.run_exchange(_user())
        assert [turn.role for turn in turns] == [ChatRole.USER]

    @pytest.mark.asyncio
    async def test_system_prompt_and_tools_sent(self, orchestrator, llm):
        llm.generate.return_value = ModelResponse(text_parts=['ok'])
        await orchestrator.run_exchange(_user())

        messages = llm.generate.call_args.args[0]
        assert messages[0]['role'] == 'system'
        assert 'createComponent' in messages[0]['content']
        names = [tool['function']['name'] for tool in llm.generate.call_args.kwargs['tools']]
        assert names == ['createNode', 'createComponent']


class TestCreateNode:
    """createNode tool"""

    @pytest.mark.asyncio
    async def test_first_node_becomes_parent_of_the_rest(self, orchestrator, store):
        results = await orchestrator.execute_tool_calls([
            _call('createNode', content='Root'),
            _call('createNode', content='Child A'),
            _call('createNode', content='Child B'),
        ])

        root_id = results[0][1]['nodeId']
        assert [child.content for child in store.children_of(root_id)] == ['Child A', 'Child B']
        assert all((node.width, node.height) == (250, 100) for node in store.nodes)

    @pytest.mark.asyncio
    async def test_explicit_parent_wins(self, orchestrator, store):
        other = store.add_node(NodeDraft(type=NodeKind.TEXT, content='other', width=250, height=100))
        results = await orchestrator.execute_tool_calls([
            _call('createNode', content='Root'),
            _call('createNode', content='Attached', parentNodeId=other.id),
        ])
        attached_id = results[1][1]['nodeId']
        assert store.parent_of(attached_id).id == other.id

    @pytest.mark.asyncio
    async def test_initial_parent_used(self, orchestrator, store):
        root = store.add_node(NodeDraft(type=NodeKind.TEXT, content='root', width=250, height=100))
        await orchestrator.execute_tool_calls([_call('createNode', content='a')], initial_parent_id=root.id)
        assert len(store.children_of(root.id)) == 1

    @pytest.mark.asyncio
    async def test_code_node_type(self, orchestrator, store):
        await orchestrator.execute_tool_calls([_call('createNode', content='x = 1', nodeType='code')])
        assert store.nodes[0].type == 'code'

    @pytest.mark.asyncio
    async def test_missing_content(self, orchestrator, store):
        [(_, result)] = await orchestrator.execute_tool_calls([_call('createNode')])
        assert result == {'error': 'Missing required argument: content'}
        assert store.nodes == []

    @pytest.mark.asyncio
    async def test_unknown_function(self, orchestrator):
        [(_, result)] = await orchestrator.execute_tool_calls([_call('deleteEverything')])
        assert result == {'error': 'Unknown function'}


class TestCreateComponent:
    """createComponent tool"""

    @pytest.mark.asyncio
    async def test_placeholder_becomes_code_node(self, orchestrator, store, generator):
        [(_, result)] = await orchestrator.execute_tool_calls([_call('createComponent', prompt='a clock')])

        assert result['status'] == 'completed'
        node = store.get_node(result['nodeId'])
        assert node.type == 'code'
        assert node.content == '<html>game</html>'
        assert (node.width, node.height) == (450, 300)
        generator.generate_document.assert_awaited_once_with('a clock')

    @pytest.mark.asyncio
    async def test_placeholder_visible_while_generating(self, orchestrator, store, generator):
        seen = []

        async def generate(prompt):
            seen.append([(node.type, node.content, node.width) for node in store.nodes])
            return COMPONENT_ERROR_HTML

        generator.generate_document.side_effect = generate
        await orchestrator.execute_tool_calls([_call('createComponent', prompt='x')])

        assert seen == [[('loading', 'Generating component...', 300)]]
        assert store.nodes[0].content == COMPONENT_ERROR_HTML

    @pytest.mark.asyncio
    async def test_placeholder_resolved_on_unexpected_failure(self, orchestrator, store, generator):
        generator.generate_document.side_effect = RuntimeError("crash")
        with pytest.raises(RuntimeError):
            await orchestrator.execute_tool_calls([_call('createComponent', prompt='x')])
        assert store.nodes[0].type == 'code'
        assert store.nodes[0].content == COMPONENT_ERROR_HTML

    @pytest.mark.asyncio
    async def test_missing_prompt(self, orchestrator, generator):
        [(_, result)] = await orchestrator.execute_tool_calls([_call('createComponent')])
        assert result == {'error': 'Missing required argument: prompt'}
        generator.generate_document.assert_not_called()


class TestExchangeLoop:
    """Multi-round exchanges"""

    @pytest.mark.asyncio
    async def test_tool_results_fed_back(self, orchestrator, llm, store):
        llm.generate.side_effect = [
            ModelResponse(tool_calls=[_call('createNode', 'call_1', content='Root')]),
            ModelResponse(text_parts=['Created a root.']),
        ]
        turns = await orchestrator.run_exchange(_user('map'))

        assert turns[-1].text == 'Created a root.'
        second_round = llm.generate.call_args_list[1].args[0]
        assert second_round[-2]['role'] == 'assistant'
        assert second_round[-2]['tool_calls'][0]['id'] == 'call_1'
        assert second_round[-1]['role'] == 'tool'
        assert json.loads(second_round[-1]['content']) == {'nodeId': store.nodes[0].id}

    @pytest.mark.asyncio
    async def test_parent_resets_each_round(self, orchestrator, llm, store):
        llm.generate.side_effect = [
            ModelResponse(tool_calls=[_call('createNode', content='A')]),
            ModelResponse(tool_calls=[_call('createNode', content='B')]),
            ModelResponse(text_parts=['done']),
        ]
        await orchestrator.run_exchange(_user())
        assert len(store.nodes) == 2
        assert store.edges == []

    @pytest.mark.asyncio
    async def test_round_budget(self, orchestrator, llm, store):
        llm.generate.return_value = ModelResponse(tool_calls=[_call('createNode', content='again')])
        turns = await orchestrator.run_exchange(_user())

        assert turns[-1].text == TOO_MANY_TOOL_CALLS_TEXT
        assert llm.generate.await_count == 4
        # Nodes from completed rounds stay
        assert len(store.nodes) == 3

    @pytest.mark.asyncio
    async def test_model_failure_keeps_created_nodes(self, orchestrator, llm, store):
        llm.generate.side_effect = [
            ModelResponse(tool_calls=[_call('createNode', content='A')]),
            LLMServiceError("provider down"),
        ]
        turns = await orchestrator.run_exchange(_user(), error_text='custom apology')

        assert turns[-1].role == ChatRole.MODEL
        assert turns[-1].text == 'custom apology'
        assert len(store.nodes) == 1

    @pytest.mark.asyncio
    async def test_default_error_text(self, orchestrator, llm):
        llm.generate.side_effect = LLMServiceError("down")
        turns = await orchestrator.run_exchange(_user())
        assert turns[-1].text == GENERIC_ERROR_TEXT

    @pytest.mark.asyncio
    async def test_history_replays_only_final_text(self, orchestrator, llm):
        llm.generate.side_effect = [
            ModelResponse(tool_calls=[_call('createNode', 'call_1', content='A')]),
            ModelResponse(text_parts=['first answer']),
            ModelResponse(text_parts=['second answer']),
        ]
        await orchestrator.run_exchange(_user('one'))
        await orchestrator.run_exchange(_user('two'))

        replay = llm.generate.call_args_list[2].args[0]
        assert [message['role'] for message in replay] == ['system', 'user', 'assistant', 'user']
        assert replay[2]['content'] == 'first answer'
        assert all(message['role'] != 'tool' for message in replay)

    @pytest.mark.asyncio
    async def test_generator_crash_ends_with_apology(self, orchestrator, llm, generator, store):
        generator.generate_document.side_effect = RuntimeError("boom")
        llm.generate.side_effect = [
            ModelResponse(tool_calls=[_call('createComponent', prompt='game')]),
            ModelResponse(text_parts=['never reached']),
        ]
        turns = await orchestrator.run_exchange(_user('game'))

        assert [turn.role for turn in turns] == [ChatRole.USER, ChatRole.MODEL]
        assert turns[-1].text == GENERIC_ERROR_TEXT
        assert llm.generate.await_count == 1
        assert store.nodes[0].type == 'code'
        assert store.nodes[0].content == COMPONENT_ERROR_HTML

    @pytest.mark.asyncio
    async def test_unexpected_model_error_ends_with_apology(self, orchestrator, llm, store):
        llm.generate.side_effect = TypeError("bad response")
        turns = await orchestrator.run_exchange(_user(), error_text='custom apology')

        assert turns[-1].role == ChatRole.MODEL
        assert turns[-1].text == 'custom apology'
        assert store.project.chat_history[-1].text == 'custom apology'

    @pytest.mark.asyncio
    async def test_degraded_component_still_succeeds(self, orchestrator, llm, generator, store):
        generator.generate_document.return_value = COMPONENT_ERROR_HTML
        llm.generate.side_effect = [
            ModelResponse(tool_calls=[_call('createComponent', 'call_1', prompt='game')]),
            ModelResponse(text_parts=['Here is your component.']),
        ]
        turns = await orchestrator.run_exchange(_user('game'))

        [node] = store.nodes
        assert node.type == 'code'
        assert node.content == COMPONENT_ERROR_HTML

        second_round = llm.generate.call_args_list[1].args[0]
        assert second_round[-1]['role'] == 'tool'
        assert second_round[-1]['tool_call_id'] == 'call_1'

        assert turns[-1].role == ChatRole.MODEL
        assert turns[-1].text == 'Here is your component.'
