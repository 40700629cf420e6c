"""Prompt templates for the LLM-backed lookup stages."""

QUICK_TRANSLATE_SYSTEM = (
    "You are a Thai-English dictionary. Reply with JSON only."
)

QUICK_TRANSLATE_USER = (
    "Translate to {target_language}: {text}\n"
    'Return JSON: {{ "translatedText": "...", "transliteration": "..." }}\n'
    "transliteration is the romanized pronunciation of the Thai side."
)

ANALYSIS_SYSTEM = (
    "You are a Thai language teacher who explains vocabulary word by word. "
    "Reply with JSON only."
)

ANALYSIS_USER = """Context: Input "{original}", Translation "{translated}".
1. Segment the Thai text (source or translation) into individual words.
2. For each segment provide:
   - Thai word
   - Transliteration
   - English meaning: MUST provide the primary literal dictionary definition FIRST. If the word has a different meaning in this specific context, include it after in parentheses. Example: for 'ตรง' (in 'straight on time'), return 'straight (context: on time)'.
   - Part of Speech.
3. Generate ONE simple example sentence using the main keyword.
4. If the original transliteration was missing, ensure segments have accurate transliteration.

Return JSON with this shape:
{{
  "segments": [
    {{"thai": "...", "transliteration": "...", "english": "...", "partOfSpeech": "..."}}
  ],
  "exampleSentenceThai": "...",
  "exampleSentenceEnglish": "..."
}}"""

SYNONYMS_SYSTEM = "You are a Thai thesaurus. Reply with JSON only."

SYNONYMS_USER = """For the following Thai words: {words}
Provide 2-3 synonyms for each.
Return JSON: {{ "synonyms": [ {{"word": "...", "synonyms": ["...", "..."]}} ] }}"""
