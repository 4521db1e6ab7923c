"""Builtin prompt templates.

These definitions are embedded directly so the engine always has a usable
template set without any file or network access. They are the guaranteed
fallback when remote loading fails.
"""

from __future__ import annotations

import textwrap

from .models import (
    PromptTemplate,
    TemplateCategory,
    TemplateMetadata,
    TemplateVariable,
    VariableType,
)

REACT_VITE_BASE_ID = "react-vite-base"
REACT_COMPONENT_ID = "react-component"

_REACT_VITE_BASE_CONTENT = textwrap.dedent("""\
    # Project Creation Task

    ## Project Information
    - **Project name**: {{projectName}}
    - **Description**: {{projectDescription}}
    - **UI library**: {{uiLibraryName}}
    - **Stack**: React + Vite + TypeScript + Tailwind CSS{{#if animations}}
    - **Animation library**: Framer Motion{{/if}}

    ## Requirements

    Create a modern React project that follows these requirements exactly.

    ### 1. Stack
    - **Framework**: React 18+
    - **Build tool**: Vite 5+
    - **Language**: TypeScript 5+
    - **Styling**: Tailwind CSS 3+ (mandatory)
    - **UI library**: {{uiLibraryName}} (`{{uiLibraryPackage}}`){{#if animations}}
    - **Animation**: Framer Motion{{/if}}

    ### 2. Project structure
    ```
    {{projectName}}/
    ├── public/
    │   └── vite.svg
    ├── src/
    │   ├── components/
    │   │   ├── ui/              # Button.tsx, Input.tsx, Card.tsx
    │   │   └── layout/          # Header.tsx, Footer.tsx, Layout.tsx
    │   ├── pages/               # Home.tsx, About.tsx, NotFound.tsx{{#if features.includes 'routing'}}
    │   ├── router/
    │   │   └── index.tsx{{/if}}{{#if features.includes 'state'}}
    │   ├── store/
    │   │   └── index.ts{{/if}}
    │   ├── hooks/
    │   │   └── useLocalStorage.ts
    │   ├── utils/
    │   │   ├── cn.ts
    │   │   └── constants.ts
    │   ├── types/
    │   │   └── index.ts
    │   ├── styles/
    │   │   └── globals.css{{#if animations}}
    │   ├── animations/
    │   │   └── variants.ts{{/if}}
    │   ├── App.tsx
    │   ├── main.tsx
    │   └── vite-env.d.ts
    ├── index.html
    ├── package.json
    ├── tsconfig.json
    ├── tsconfig.node.json
    ├── tailwind.config.js
    ├── postcss.config.js
    ├── vite.config.ts
    ├── .gitignore
    └── README.md
    ```

    ### 3. Dependencies (package.json)
    ```json
    {
      "react": "^18.2.0",
      "react-dom": "^18.2.0",{{#if features.includes 'routing'}}
      "react-router-dom": "^6.8.0",{{/if}}{{#if features.includes 'state'}}
      "zustand": "^4.5.0",{{/if}}{{#if animations}}
      "framer-motion": "^10.0.0",{{/if}}
      "{{uiLibraryPackage}}": "latest",
      "clsx": "^2.0.0",
      "tailwind-merge": "^2.0.0"
    }
    ```

    ### 4. Rules
    1. Every component has complete TypeScript types.
    2. Tailwind CSS is the primary styling approach.
    3. {{uiLibraryName}} components enhance the UI without conflicting with Tailwind.
    4. Include basic error handling.{{#if animations}}
    5. Use Framer Motion for page transitions and component animation.{{/if}}

    ## Acceptance criteria
    - `pnpm install && pnpm dev` starts the project.
    - Every page renders.{{#if features.includes 'routing'}}
    - Routing works between all pages.{{/if}}
    - {{uiLibraryName}} components display correctly.
    - TypeScript compiles without errors.

    Write every file in full. Do not use placeholders or ellipses.

    ## Output format

    Emit every file preceded by a delimiter line of the form
    `===FILE: <relative path>===`, for example:

    ===FILE: package.json===
    {
      "name": "{{projectName}}"
    }

    ===FILE: src/App.tsx===
    export default function App() { ... }

    Use the `===FILE: path===` delimiter for every file and output nothing
    between files other than their contents.
    """)

_REACT_COMPONENT_CONTENT = textwrap.dedent("""\
    You are an expert React developer. Generate a React component using
    TypeScript and {{uiLibraryName}} for the following request.

    **Requirements:**
    - Framework: {{framework}}
    - UI library: {{uiLibraryName}} (`{{uiLibraryPackage}}`)
    - Component: {{componentName}}
    - User intent: {{userIntent}}

    **Guidelines:**
    1. Functional components with hooks and typed props interfaces.
    2. Import components from `{{uiLibraryPackage}}` and follow its design patterns.
    3. Semantic HTML and accessibility attributes.
    4. PascalCase for components, camelCase for variables.{{#if includeStyles}}
    5. Include Tailwind classes for layout and spacing.{{/if}}{{#if existingCode}}

    **Existing code to take into account:**
    ```tsx
    {{existingCode}}
    ```{{/if}}

    Reply with a single fenced code block whose first line is a comment
    naming the file, for example:

    ```tsx
    // src/components/{{componentName}}.tsx
    export const {{componentName}} = () => { ... }
    ```
    """)


def builtin_templates() -> list[PromptTemplate]:
    """Return fresh copies of every builtin template."""
    return [
        PromptTemplate(
            id=REACT_VITE_BASE_ID,
            name="React + Vite base project",
            description="Create a modern React + Vite + TypeScript project",
            version="1.0.0",
            category=TemplateCategory.PROJECT_CREATION,
            tags=["react", "vite", "typescript", "tailwind"],
            variables=[
                TemplateVariable(
                    name="projectName", type=VariableType.STRING, required=True,
                    description="Project name",
                ),
                TemplateVariable(
                    name="projectDescription", type=VariableType.STRING, required=True,
                    description="Project description",
                ),
                TemplateVariable(
                    name="uiLibrary", type=VariableType.STRING, required=True,
                    description="UI component library id",
                    options=["antd", "mui", "chakra", "mantine", "nextui", "arco"],
                ),
                TemplateVariable(
                    name="features", type=VariableType.ARRAY,
                    description="Project features", default_value=["routing"],
                ),
                TemplateVariable(
                    name="animations", type=VariableType.BOOLEAN,
                    description="Include animation effects", default_value=False,
                ),
            ],
            content=_REACT_VITE_BASE_CONTENT,
            metadata=TemplateMetadata(
                author="PromptForge",
                license="MIT",
                compatibility=["react@18+", "vite@5+", "typescript@5+"],
            ),
        ),
        PromptTemplate(
            id=REACT_COMPONENT_ID,
            name="React component",
            description="Generate a single React component for the selected UI library",
            version="1.0.0",
            category=TemplateCategory.COMPONENT_GENERATION,
            tags=["react", "component", "typescript"],
            variables=[
                TemplateVariable(
                    name="componentName", type=VariableType.STRING, required=True,
                    description="PascalCase component name",
                ),
                TemplateVariable(
                    name="userIntent", type=VariableType.STRING, required=True,
                    description="What the component should do",
                ),
                TemplateVariable(
                    name="includeStyles", type=VariableType.BOOLEAN,
                    description="Ask for Tailwind styling", default_value=True,
                ),
                TemplateVariable(
                    name="existingCode", type=VariableType.STRING,
                    description="Code the component must integrate with",
                ),
            ],
            content=_REACT_COMPONENT_CONTENT,
            metadata=TemplateMetadata(
                author="PromptForge",
                license="MIT",
                compatibility=["react@18+", "typescript@5+"],
                dependencies=[REACT_VITE_BASE_ID],
            ),
        ),
    ]
