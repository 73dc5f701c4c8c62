"""Agent configuration, backend presets and an executor for local AI agent CLIs."""