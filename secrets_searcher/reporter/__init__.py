"""Report data assembly and HTML/YAML report writing."""