from langchain_core.prompts import ChatPromptTemplate

REFORMAT_SYSTEM_PROMPT = """
You are a careful editor for a Colombian tourism assistant.
Rewrite the assistant answer you receive so it is easier to read:
- Use shorter sentences.
- When the answer enumerates items (places, steps, tips), turn them into a bullet list.
- Keep every fact, name and number. Do NOT add information that is not in the answer.
- Answer in the same language as the original text.
Return ONLY the rewritten answer, without any preamble.
"""

EXTRACT_SYSTEM_PROMPT = """
You extract tourism places from travel answers about Colombia.
Return ONLY a valid JSON array. Each element must be an object with:
 - "name": name of the place, attraction or destination (string, required)
 - "city": city or municipality where it is located (string or null)
 - "department": Colombian department / region (string or null)

Only include concrete places a traveller could visit. Keep the order in which
they appear in the text. If there are none, return [].
Do NOT include explanations outside the JSON.
"""

REFORMAT_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", REFORMAT_SYSTEM_PROMPT),
        ("human", "{text}"),
    ]
)

EXTRACT_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", EXTRACT_SYSTEM_PROMPT),
        ("human", "{text}"),
    ]
)
