"""自定义异常模块，为pphooks预提交钩子提供统一的错误处理。

异常分类：
- 前置条件错误：外部工具缺失、bundler环境不一致、不在git工作树中
- 安装错误：钩子脚本无法写入仓库的hooks目录

逐文件的校验失败不是异常，而是 ValidationOutcome 数据。
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ErrorCategory(Enum):
    """错误分类枚举。"""
    USER = "user"             # 用户操作错误
    SYSTEM = "system"         # 系统环境错误
    EXTERNAL = "external"     # 外部依赖错误


class PPHooksError(Exception):
    """pphooks系统的基础异常类。

    属性:
        message: 用户可读的错误消息
        error_code: 标准化错误代码 (格式: CATEGORY_SPECIFIC_CODE)
        suggested_fix: 解决建议
        context: 错误上下文信息
        category: 错误分类
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        suggested_fix: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        category: Union[str, ErrorCategory] = ErrorCategory.SYSTEM,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.suggested_fix = suggested_fix
        self.context = context or {}
        self.category = category if isinstance(category, ErrorCategory) else ErrorCategory(category)

    def get_user_message(self) -> str:
        """获取带解决建议的错误消息。"""
        user_msg = f"Error: {self.message}"
        if self.suggested_fix:
            user_msg += f"\n{self.suggested_fix}"
        return user_msg

    def get_full_details(self) -> Dict[str, Any]:
        """获取完整的错误详情，用于调试日志。"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "suggested_fix": self.suggested_fix,
            "context": self.context,
        }

    def add_context(self, key: str, value: Any) -> None:
        """添加上下文信息。"""
        self.context[key] = value


# ===== 前置条件错误 =====

class PreconditionError(PPHooksError):
    """前置条件错误的基类。

    在检查任何文件之前发生，总是导致退出码1。
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("category", ErrorCategory.EXTERNAL)
        super().__init__(message, **kwargs)


class ToolNotFoundError(PreconditionError):
    """必需的外部工具不在PATH中。"""

    def __init__(self, tools: Union[str, List[str]], **kwargs):
        self.tools = [tools] if isinstance(tools, str) else list(tools)
        names = ", ".join(self.tools)
        kwargs.setdefault("error_code", "TOOL_NOT_FOUND")
        kwargs.setdefault(
            "suggested_fix",
            f"Install {names} and make sure it is on PATH, or add it to the Gemfile and run 'bundle install'",
        )
        kwargs.setdefault("context", {})["missing_tools"] = self.tools
        noun = "tool" if len(self.tools) == 1 else "tools"
        super().__init__(f"Required {noun} not found: {names}", **kwargs)


class BundleEnvironmentError(PreconditionError):
    """Gemfile存在但 bundle check 报告环境不完整。"""

    def __init__(self, output: str = "", gemfile: Union[str, Path, None] = None, **kwargs):
        self.output = output.strip()
        self.gemfile = Path(gemfile) if gemfile else None
        kwargs.setdefault("error_code", "BUNDLE_INCONSISTENT")
        kwargs.setdefault("suggested_fix", "Run 'bundle install' to install the missing gems")
        context = kwargs.setdefault("context", {})
        if self.gemfile:
            context["gemfile"] = str(self.gemfile)
        message = "Bundler reports an incomplete environment"
        if self.output:
            message += f":\n{self.output}"
        super().__init__(message, **kwargs)


class WorkingTreeError(PreconditionError):
    """无法确定git工作树的顶层目录。"""

    def __init__(self, message: str, path: Union[str, Path, None] = None, **kwargs):
        self.path = Path(path) if path else None
        kwargs.setdefault("error_code", "NOT_A_WORKING_TREE")
        kwargs.setdefault("suggested_fix", "Run the hook from inside a git working tree")
        kwargs.setdefault("category", ErrorCategory.USER)
        if self.path:
            kwargs.setdefault("context", {})["path"] = str(self.path)
        super().__init__(message, **kwargs)


# ===== 安装错误 =====

class HookInstallError(PPHooksError):
    """钩子脚本安装失败。"""

    def __init__(self, message: str, hook_path: Union[str, Path, None] = None, **kwargs):
        self.hook_path = Path(hook_path) if hook_path else None
        kwargs.setdefault("error_code", "HOOK_INSTALL_FAILED")
        kwargs.setdefault("category", ErrorCategory.SYSTEM)
        if self.hook_path:
            kwargs.setdefault("context", {})["hook_path"] = str(self.hook_path)
        super().__init__(message, **kwargs)


__all__ = [
    "ErrorCategory",
    "PPHooksError",
    "PreconditionError",
    "ToolNotFoundError",
    "BundleEnvironmentError",
    "WorkingTreeError",
    "HookInstallError",
]
