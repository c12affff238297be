"""Statische Daten: Default-Agent-Config, Scaffold-Template, Quick-Start.

Die Default-Config ist in camelCase gehalten, da sie 1:1 als
``agent-config.json`` an die gescaffoldete Anwendung geht.
"""

from __future__ import annotations

from typing import Any

from idea_radar.domain.models import QuickStartStep, TemplateInfo

DEFAULT_AGENT_CONFIG: dict[str, Any] = {
    "meta": {"version": "1.0.0"},
    "agent": {
        "name": "AI Assistant",
        "persona": "You are a helpful AI assistant.",
        "tone": "friendly and professional",
        "language": "en",
    },
    "prompts": {
        "system": "You are a helpful assistant. Answer questions clearly and concisely.",
        "welcome": "Hi! How can I help you today?",
        "placeholder": "Type your message...",
        "errorMessage": "Sorry, something went wrong. Please try again.",
    },
    "ui": {
        "title": "AI Agent",
        "subtitle": "Your AI Assistant",
        "description": "Chat with your AI agent",
        "primaryColor": "#3B82F6",
        "accentColor": "#10B981",
    },
    "capabilities": {
        "streaming": True,
        "markdown": True,
        "codeHighlight": True,
        "maxTokens": 2048,
        "temperature": 0.7,
    },
    "examples": [
        "What can this service do?",
        "How do I get started?",
        "Show me an example",
    ],
}

# Neutrale Palette fuer die regelbasierte Fallback-Config
FALLBACK_PRIMARY_COLOR = "#3B82F6"
FALLBACK_ACCENT_COLOR = "#10B981"

CUSTOMIZATION_PROMPT_TEMPLATE = """Below is the configuration JSON of an AI agent. Modify it to apply [your desired changes].

Current configuration:
```json
{CONFIG_JSON}
```

Rules:
1. Keep valid JSON
2. Keep every field
3. Colors must be hex codes (e.g. "#3B82F6")

Change request: """

_CONFIG_TYPES_TS = """export interface AgentConfig {
  meta: { version: string; ideaId?: string; generatedAt?: string };
  agent: { name: string; persona: string; tone: string; language: string };
  prompts: { system: string; welcome: string; placeholder: string; errorMessage: string };
  ui: {
    title: string;
    subtitle: string;
    description: string;
    primaryColor: string;
    accentColor: string;
    logo?: string;
  };
  capabilities: {
    streaming: boolean;
    markdown: boolean;
    codeHighlight: boolean;
    maxTokens: number;
    temperature: number;
  };
  examples: string[];
}
"""

_CONFIG_LOADER_TS = """import { AgentConfig } from "@/types/config";
import defaults from "./default-config.json";

export async function loadConfig(): Promise<AgentConfig> {
  try {
    const response = await fetch("/agent-config.json");
    if (!response.ok) return defaults as AgentConfig;
    const config = (await response.json()) as Partial<AgentConfig>;
    return {
      meta: { ...defaults.meta, ...config.meta },
      agent: { ...defaults.agent, ...config.agent },
      prompts: { ...defaults.prompts, ...config.prompts },
      ui: { ...defaults.ui, ...config.ui },
      capabilities: { ...defaults.capabilities, ...config.capabilities },
      examples: config.examples || defaults.examples,
    };
  } catch (error) {
    console.error("Failed to load config:", error);
    return defaults as AgentConfig;
  }
}
"""

_CHAT_ROUTE_TS = """import { NextRequest, NextResponse } from "next/server";
import OpenAI from "openai";

const openai = new OpenAI({ apiKey: process.env.OPENAI_API_KEY });

export async function POST(request: NextRequest) {
  try {
    const { messages, config } = await request.json();
    const response = await openai.chat.completions.create({
      model: "gpt-4o-mini",
      messages: [{ role: "system", content: config.prompts.system }, ...messages],
      max_tokens: config.capabilities.maxTokens,
      temperature: config.capabilities.temperature,
    });
    const content = response.choices[0]?.message?.content || config.prompts.errorMessage;
    return NextResponse.json({ content });
  } catch (error) {
    console.error("Chat API Error:", error);
    return NextResponse.json({ error: "Failed to process request" }, { status: 500 });
  }
}
"""

TEMPLATE_INFO = TemplateInfo.model_validate({
    "setupCommands": [
        "npx create-next-app@latest my-agent --typescript --tailwind --app --src-dir --no-eslint",
        "cd my-agent",
        "npm install openai ai react-markdown",
    ],
    "envVariables": [
        {
            "key": "OPENAI_API_KEY",
            "description": "OpenAI API key",
            "example": "sk-...",
            "required": True,
            "source": "https://platform.openai.com/api-keys",
        },
    ],
    "files": [
        {
            "path": "src/types/config.ts",
            "filename": "config.ts",
            "language": "typescript",
            "description": "AgentConfig type definition",
            "content": _CONFIG_TYPES_TS,
        },
        {
            "path": "src/lib/config.ts",
            "filename": "config.ts",
            "language": "typescript",
            "description": "Config loader, merges agent-config.json over the defaults",
            "content": _CONFIG_LOADER_TS,
        },
        {
            "path": "src/app/api/chat/route.ts",
            "filename": "route.ts",
            "language": "typescript",
            "description": "Chat API endpoint",
            "content": _CHAT_ROUTE_TS,
        },
    ],
})

QUICK_START_GUIDE: list[QuickStartStep] = [
    QuickStartStep(
        order=1,
        title="Create the project",
        description="Scaffold a Next.js project",
        command="npx create-next-app@latest my-agent --typescript --tailwind --app --src-dir --no-eslint",
        notes=["Uses the App Router and a src/ directory", "Rename the project as you like"],
    ),
    QuickStartStep(
        order=2,
        title="Install dependencies",
        description="Install the required packages",
        command="cd my-agent && npm install openai ai react-markdown",
    ),
    QuickStartStep(
        order=3,
        title="Configure environment",
        description="Create .env.local and set your API key",
        command="echo 'OPENAI_API_KEY=your-api-key-here' > .env.local",
        notes=["Replace the placeholder with a real key"],
    ),
    QuickStartStep(
        order=4,
        title="Save the config",
        description="Save the agent config JSON as public/agent-config.json",
        notes=["File path: public/agent-config.json"],
    ),
    QuickStartStep(
        order=5,
        title="Copy the template files",
        description="Copy each template file to its path",
        notes=["Overwrite existing files"],
    ),
    QuickStartStep(
        order=6,
        title="Run the dev server",
        description="Start the dev server and open the browser",
        command="npm run dev",
        notes=["http://localhost:3000"],
    ),
]

# --- Trends ---

# Google-Trends-Kategoriecodes
CATEGORY_CODES: dict[str, int] = {
    "investment": 7,      # Finance
    "education": 958,     # Education
    "real_estate": 29,    # Real Estate
    "technology": 5,      # Computers & Electronics
    "health": 45,         # Health
}

SUPPORTED_REGIONS: tuple[str, ...] = ("US", "KR", "JP", "GB", "DE", "FR", "BR", "IN")

# Fallback fuer "Surprise me", wenn noch keine Trends gespeichert sind
FALLBACK_TOPICS: tuple[str, ...] = (
    "AI investment platforms",
    "Real estate automation",
    "Education technology",
    "Healthcare AI",
    "Fintech startups",
)

FALLBACK_TOPIC_ID = "default_topic"
