from panelgen.llm.llm_manager import get_llm
