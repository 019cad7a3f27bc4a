from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class SiteConfig:
    """站点配置"""

    name: str = "website"
    web_root: str = "/"
    doc_root: str = "."  # 页面文件所在的物理目录
    index_page: str = "index.html"
    charset: str = "utf-8"
    namespace: str = "Web"  # session 变量的命名空间
    page_title: str = ""
    last_update: Optional[str] = None

    # 语言
    default_language: str = "de"
    languages: Dict[str, str] = field(
        default_factory=lambda: {
            "de": "Deutsch",
            "fr": "Français",
            "it": "Italiano",
            "en": "English",
        }
    )
    language_query_whitelist: List[str] = field(default_factory=list)

    # 导航菜单
    menu_css_class: str = "menu"
    menu_css_id: Optional[str] = None
    menu_item_id_prefix: Optional[str] = None
    menu_match_mode: int = 1
    auto_active: bool = True
    all_children_rendered: bool = False

    # REST 接口前缀
    api_prefix: str = "api"

    def __post_init__(self):
        if not self.web_root.endswith("/"):
            self.web_root = f"{self.web_root}/"
        self.api_prefix = self.api_prefix.strip("/")
        if self.default_language not in self.languages:
            raise ValueError(
                f"default language '{self.default_language}' is not one of {list(self.languages)}"
            )
