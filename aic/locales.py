"""Display strings and prompt wording per language."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .exceptions import ConfigError


@dataclass(frozen=True)
class Locale:
    code: str
    starting: str
    checking: str
    staging: str
    no_changes: str
    summary: str
    files_added: str
    files_modified: str
    files_deleted: str
    context_prompt: str
    generating: str
    regenerating: str
    analysis_done: str
    menu_title: str
    menu_commit: str
    menu_regenerate: str
    menu_edit: str
    menu_cancel: str
    selection: str
    invalid: str
    success: str
    success_edited: str
    cancelled: str
    edited: str
    edit_aborted: str
    inline_edit_prompt: str
    blocked: str
    branch_info: str
    error: str
    prompt_language: str
    prompt_example: str
    err_not_installed: str
    err_not_authenticated: str
    err_generation_empty: str
    err_not_git: str


ENGLISH = Locale(
    code="en",
    starting="\n🚀 Starting AI Commit Generator...",
    checking="Checking environment and repository...",
    staging="Staging changes and gathering data...",
    no_changes="✨ No changes staged. Please make some changes first.",
    summary="\n📊 Change Summary:",
    files_added="new files",
    files_modified="modified files",
    files_deleted="deleted files",
    context_prompt="\n📝 Provide context (Optional, press Enter to skip)",
    generating="AI is analyzing changes and drafting message...",
    regenerating="Regenerating...",
    analysis_done="AI Analysis completed in",
    menu_title="\nWhat would you like to do?",
    menu_commit="✅ Commit",
    menu_regenerate="🔄 Regenerate",
    menu_edit="✏️  Edit",
    menu_cancel="❌ Cancel",
    selection="Selection [1-4] > ",
    invalid="Invalid selection.",
    success="\n🎉 Successfully committed!",
    success_edited="\n🎉 Committed with edited message!",
    cancelled="\nCommit cancelled.",
    edited="\n✏️  Message updated.",
    edit_aborted="\nNo changes saved. Keeping the current message.",
    inline_edit_prompt="\nEnter your custom message (empty keeps the current one):",
    blocked="⛔ Commit blocked: {reason}",
    branch_info="ℹ️  {reason}",
    error="\nAn unexpected error occurred:",
    prompt_language="English",
    prompt_example="- index.js: Refactor AI prompt and optimize performance",
    err_not_installed=(
        "❌ The '{command}' generator is not available. "
        "Install it (e.g. npm install -g @google/gemini-cli) "
        "or choose another provider with --provider."
    ),
    err_not_authenticated=(
        "🔑 The generator rejected the request. If it needs a login, run "
        "'{command}' in your terminal, follow the sign-in instructions, "
        "then try again. Otherwise check your API key and connectivity."
    ),
    err_generation_empty="❌ The generator returned an empty message. Please try again.",
    err_not_git=(
        "📁 This is not a git repository. "
        "Please run this command inside a git project."
    ),
)

KOREAN = Locale(
    code="ko",
    starting="\n🚀 AI 커밋 생성기를 시작합니다...",
    checking="환경 및 저장소 확인 중...",
    staging="변경 사항 스테이징 및 데이터 수집 중...",
    no_changes="✨ 스테이징된 변경 사항이 없습니다. 먼저 파일을 수정해주세요.",
    summary="\n📊 변경 요약:",
    files_added="개의 새 파일",
    files_modified="개의 수정된 파일",
    files_deleted="개의 삭제된 파일",
    context_prompt="\n📝 추가 맥락 제공 (선택 사항, 건너뛰려면 Enter)",
    generating="AI가 변경 사항을 분석하고 메시지를 작성 중입니다...",
    regenerating="다시 생성 중...",
    analysis_done="AI 분석 완료:",
    menu_title="\n어떻게 하시겠습니까?",
    menu_commit="✅ 커밋하기",
    menu_regenerate="🔄 다시 생성",
    menu_edit="✏️  수정하기",
    menu_cancel="❌ 취소",
    selection="선택 [1-4] > ",
    invalid="잘못된 선택입니다.",
    success="\n🎉 성공적으로 커밋되었습니다!",
    success_edited="\n🎉 수정된 메시지로 커밋되었습니다!",
    cancelled="\n커밋이 취소되었습니다.",
    edited="\n✏️  메시지가 수정되었습니다.",
    edit_aborted="\n저장된 변경 사항이 없습니다. 기존 메시지를 유지합니다.",
    inline_edit_prompt="\n새 커밋 메시지를 입력하세요 (비워두면 기존 메시지 유지):",
    blocked="⛔ 커밋이 차단되었습니다: {reason}",
    branch_info="ℹ️  {reason}",
    error="\n예상치 못한 오류가 발생했습니다:",
    prompt_language="KOREAN (한국어)",
    prompt_example="- index.js: AI 프롬프트 수정 및 성능 최적화",
    err_not_installed=(
        "❌ '{command}' 생성기를 사용할 수 없습니다. "
        "설치하거나 (예: npm install -g @google/gemini-cli) "
        "--provider 로 다른 제공자를 선택해주세요."
    ),
    err_not_authenticated=(
        "🔑 생성기가 요청을 거부했습니다. 로그인이 필요하다면 터미널에서 "
        "'{command}' 명령어를 실행해 안내에 따라 인증한 뒤 다시 실행해주세요. "
        "그렇지 않다면 API 키와 네트워크 연결을 확인해주세요."
    ),
    err_generation_empty="❌ 생성기가 빈 메시지를 반환했습니다. 다시 시도해주세요.",
    err_not_git="📁 이곳은 Git 저장소가 아닙니다. Git 프로젝트 내부에서 실행해주세요.",
)

LOCALES: Mapping[str, Locale] = MappingProxyType(
    {ENGLISH.code: ENGLISH, KOREAN.code: KOREAN}
)


def get_locale(code: str) -> Locale:
    locale = LOCALES.get(code)
    if locale is None:
        raise ConfigError(f"Unsupported language: {code}")
    return locale
