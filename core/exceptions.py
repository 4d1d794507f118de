"""
core/exceptions.py - 통합 예외 계층 구조

태그 동기화 glue와 acceptance 하네스 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    AAError (베이스)
    ├── ConfigError (설정 관련)
    ├── APICallError (AWS API 호출)
    ├── NotFoundError (리소스 없음)
    ├── ServiceNotFoundError (등록되지 않은 서비스)
    ├── TagSyncError (태그 동기화)
    │   ├── TagListError
    │   └── TagUpdateError
    └── AcceptanceError (acceptance 테스트)
        ├── CheckError
        └── TerraformError

Usage:
    from core.exceptions import TagUpdateError

    try:
        client.tag_resource(resourceArn=arn, tags=tags)
    except ClientError as e:
        raise TagUpdateError("tagging", arn, cause=e) from e
"""

from typing import Any, Dict, List, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class AAError(Exception):
    """기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(AAError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# AWS API 관련 예외
# =============================================================================


class APICallError(AAError):
    """AWS API 호출 관련 예외

    boto3/botocore의 ClientError를 래핑하여 일관된 예외 처리를 제공합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
    ) -> "APICallError":
        """botocore.exceptions.ClientError로부터 생성

        Args:
            service: AWS 서비스 이름
            operation: API 작업 이름
            client_error: ClientError 예외

        Returns:
            APICallError 인스턴스
        """
        error_info = getattr(client_error, "response", {}).get("Error", {})

        return cls(
            service=service,
            operation=operation,
            error_code=error_info.get("Code"),
            error_message=error_info.get("Message"),
            cause=client_error,
        )

    def __str__(self) -> str:
        # 메시지에 이미 에러 코드/메시지가 포함됨
        return self.message


class NotFoundError(AAError):
    """리소스를 찾을 수 없음

    finder 함수가 반환하며, destroy 검사에서는 성공으로 취급됩니다.
    """

    def __init__(
        self,
        resource: str,
        identifier: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"리소스 없음 [{resource}]: {identifier}", cause)
        self.resource = resource
        self.identifier = identifier
        self.details.update({"resource": resource, "identifier": identifier})


class ServiceNotFoundError(AAError):
    """등록되지 않은 서비스 이름"""

    def __init__(self, service: str, available: Optional[List[str]] = None):
        message = f"지원하지 않는 서비스: {service}"
        if available:
            message = f"{message} (지원: {', '.join(available)})"
        super().__init__(message)
        self.service = service
        self.details["service"] = service


# =============================================================================
# 태그 동기화 관련 예외
# =============================================================================


class TagSyncError(AAError):
    """태그 동기화 예외 베이스

    Attributes:
        operation: 실패한 작업 ("listing", "tagging", "untagging")
        identifier: 대상 리소스 식별자 (보통 ARN)
    """

    def __init__(
        self,
        operation: str,
        identifier: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"{operation} resource ({identifier})", cause)
        self.operation = operation
        self.identifier = identifier
        self.details.update({"operation": operation, "identifier": identifier})


class TagListError(TagSyncError):
    """태그 조회 실패"""

    def __init__(self, identifier: str, cause: Optional[Exception] = None):
        super().__init__("listing tags for", identifier, cause)


class TagUpdateError(TagSyncError):
    """태그 추가/제거 실패"""

    pass


# =============================================================================
# acceptance 테스트 관련 예외
# =============================================================================


class AcceptanceError(AAError):
    """acceptance 테스트 하네스 예외 베이스"""

    pass


class CheckError(AcceptanceError):
    """상태 검사 실패 (속성 불일치, 존재/삭제 확인 실패)"""

    pass


class TerraformError(AcceptanceError):
    """terraform CLI 실행 실패"""

    def __init__(
        self,
        command: List[str],
        returncode: int,
        stderr: str = "",
        cause: Optional[Exception] = None,
    ):
        message = f"terraform 실행 실패 [{' '.join(command)}] (exit {returncode})"
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message, cause)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.details.update({"command": command, "returncode": returncode})


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

ACTION_CHECKING_EXISTENCE = "checking existence"
ACTION_CHECKING_DESTROYED = "checking destroyed"


def provider_error(
    service: str,
    action: str,
    resource_name: str,
    identifier: str,
    cause: Optional[Exception] = None,
) -> CheckError:
    """리소스 검사 실패 메시지 생성

    형식: "<action> <service> <resource> (<id>): <cause>"

    Args:
        service: 서비스 표시 이름 (예: "Route 53")
        action: 작업 (ACTION_CHECKING_EXISTENCE 등)
        resource_name: 리소스 표시 이름 (예: "Records Exclusive")
        identifier: 리소스 ID
        cause: 원인 예외

    Returns:
        CheckError
    """
    error = CheckError(f"{action} {service} {resource_name} ({identifier})", cause)
    error.details.update(
        {
            "service": service,
            "action": action,
            "resource_name": resource_name,
            "identifier": identifier,
        }
    )
    return error


def get_error_code(error: Exception) -> str:
    """예외에서 AWS 에러 코드 추출 (없으면 빈 문자열)"""
    if isinstance(error, APICallError):
        return error.error_code or ""

    response = getattr(error, "response", None)
    if isinstance(response, dict):
        return str(response.get("Error", {}).get("Code", ""))

    return ""


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        액세스 거부 오류이면 True
    """
    return get_error_code(error) in (
        "AccessDenied",
        "AccessDeniedException",
        "UnauthorizedAccess",
        "UnauthorizedOperation",
    )


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인"""
    return get_error_code(error) in {
        "Throttling",
        "ThrottlingException",
        "RequestLimitExceeded",
        "TooManyRequestsException",
        "RateExceeded",
        "PriorRequestNotComplete",
    }


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인

    NotFoundError 자체이거나 AWS 에러 코드가 리소스 없음을 뜻하면 True
    """
    if isinstance(error, NotFoundError):
        return True

    return get_error_code(error) in {
        "ResourceNotFoundException",
        "NotFoundException",
        "NoSuchEntity",
        "NoSuchHostedZone",
        "NoSuchHealthCheck",
    }


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, AAError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    if hasattr(error, "response"):
        error_info = error.response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))

        friendly_messages = {
            "AccessDenied": "권한이 없습니다. IAM 정책을 확인하세요.",
            "ExpiredToken": "인증 토큰이 만료되었습니다. 다시 로그인하세요.",
            "InvalidClientTokenId": "잘못된 자격 증명입니다.",
            "Throttling": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }

        return friendly_messages.get(code, f"{code}: {message}")

    return str(error)
