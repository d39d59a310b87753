"""NFT Intelligence Assistant - Streamlit App with Chat UI."""

import os
import uuid
import streamlit as st
from config.settings import Settings
from schemas.context import Platform
from orchestrator import NFTIntelligenceOrchestrator


st.set_page_config(
    page_title="NFT Intelligence Assistant",
    page_icon="🔎",
    layout="wide"
)

# Initialize session state
if "user_id" not in st.session_state:
    st.session_state.user_id = str(uuid.uuid4())

if "messages" not in st.session_state:
    st.session_state.messages = []

if "orchestrator" not in st.session_state:
    st.session_state.orchestrator = None


def reset_conversation():
    """Forget the current conversation, including server-side memory."""
    if st.session_state.orchestrator is not None:
        st.session_state.orchestrator.clear_memory(st.session_state.user_id, Platform.WEB)
    st.session_state.messages = []


def get_orchestrator(settings: Settings) -> NFTIntelligenceOrchestrator:
    """Get or create orchestrator instance."""
    if st.session_state.orchestrator is None:
        st.session_state.orchestrator = NFTIntelligenceOrchestrator(settings=settings)
    return st.session_state.orchestrator


# Sidebar configuration
st.sidebar.header("Configuration")

llm_provider = st.sidebar.selectbox(
    "LLM Provider",
    options=["openai", "anthropic"],
    index=0,
    help="Select which LLM writes the answers"
)

openai_api_key = st.sidebar.text_input(
    "OpenAI API Key",
    value=os.environ.get("OPENAI_API_KEY", ""),
    type="password"
)

anthropic_api_key = st.sidebar.text_input(
    "Anthropic API Key",
    value=os.environ.get("ANTHROPIC_API_KEY", ""),
    type="password"
)

analytics_api_key = st.sidebar.text_input(
    "NFT Analytics API Key",
    value=os.environ.get("NFT_ANALYTICS_API_KEY", ""),
    type="password",
    help="Leave empty to use demo data"
)

st.sidebar.markdown("---")

with st.sidebar.expander("Advanced Settings"):
    classifier_mode = st.selectbox(
        "Intent classifier",
        options=["auto", "keyword", "llm"],
        index=0
    )
    show_debug = st.checkbox("Show debug info", value=False)

if st.sidebar.button("Start New Conversation", type="secondary"):
    reset_conversation()
    st.rerun()

if st.sidebar.button("Apply Settings"):
    st.session_state.orchestrator = None

st.sidebar.markdown("---")
st.sidebar.caption(f"User ID: {st.session_state.user_id[:8]}...")

settings = Settings(
    llm_provider=llm_provider,
    openai_api_key=openai_api_key,
    anthropic_api_key=anthropic_api_key,
    analytics_api_key=analytics_api_key,
    classifier_mode=classifier_mode,
    verbose=show_debug,
)
orchestrator = get_orchestrator(settings)

if show_debug:
    context = orchestrator.get_conversation_context(st.session_state.user_id, Platform.WEB)
    st.sidebar.json(context.model_dump(mode="json"))

# Main content
st.title("NFT Intelligence Assistant")
st.markdown("Wallet, collection and market analysis with conversation memory")

for message in st.session_state.messages:
    with st.chat_message(message["role"]):
        st.markdown(message["content"])

if prompt := st.chat_input("Ask about a wallet, collection or the NFT market..."):
    st.session_state.messages.append({"role": "user", "content": prompt})

    with st.chat_message("user"):
        st.markdown(prompt)

    with st.chat_message("assistant"):
        with st.spinner("Analyzing..."):
            result = orchestrator.process_query(prompt, st.session_state.user_id, Platform.WEB)

            if result.error:
                st.error(result.response)
            else:
                st.markdown(result.response)

            if show_debug and result.intent:
                st.info(
                    f"Intent: {result.intent.type.value} "
                    f"(confidence {result.confidence:.2f})"
                )
                if result.intent.entities:
                    st.json(result.intent.entities)

            st.session_state.messages.append({"role": "assistant", "content": result.response})

if not st.session_state.messages:
    st.markdown("""
    ### Welcome!

    I can help you understand NFT wallets, collections and market conditions.

    **Try asking:**
    - "Analyze wallet 0x742d35Cc6634C0532925a3b8D4C9db96C4b4d8b6"
    - "What's the floor price trend for the Bored Ape Yacht Club collection?"
    - "How is the NFT market doing this week?"
    - "Is this wallet a scam? 0x1234567890123456789012345678901234567890"

    Without an analytics API key the figures are demo data.
    """)

st.sidebar.markdown("---")
st.sidebar.markdown("Built with Streamlit")
