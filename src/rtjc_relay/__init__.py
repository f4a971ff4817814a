"""rtjc relay - relays legacy rtjc news events into Telegram with AI summaries.

Each line received on the rtjc socket is posted to the chat (announcements
get pinned). Lines marked for summary also get an AI summary of the linked
article, or, for podcast "prep" pages, the top listener comments each with a
summary of the link they suggest.

Components:
- main_listener: entry point, wires everything from settings
- relay: TCP listener and pin classification
- pipeline: enrichment routing, summarization, rate-limited dispatch
- retrieval: link extraction, Remark42 comments, content extraction
- llm: OpenAI summaries
- store: summary cache
- telegram: Telegram delivery
"""
