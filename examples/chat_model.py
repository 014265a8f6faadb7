"""
chat_model.py: One chat turn against an OpenAI chat model.

Usage:
    export LINKCHAIN_OPENAI_API_KEY=sk-...
    python examples/chat_model.py
"""

from linkchain.chat_models import ChatOpenAI
from linkchain.llms import ChatMessage


async def main() -> None:
    chat = ChatOpenAI(model_name="gpt-3.5-turbo", temperature=0)
    reply = await chat.run(
        [
            ChatMessage(text="You are a helpful assistant. Be concise.", role="system"),
            ChatMessage(text="What is memoization?"),
        ]
    )
    print(f"{reply.role}: {reply.text}")


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
