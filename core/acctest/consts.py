"""core/acctest/consts.py - acceptance 테스트 공통 상수"""

# 테스트 리소스 이름 접두사 (sweeper가 이 접두사로 정리)
RESOURCE_PREFIX = "tf-acc-test"

# 서브테스트 이름
CT_BASIC = "basic"

# 태그 테스트 키/값
CT_KEY1 = "key1"
CT_VALUE1 = "value1"

# testdata 설정 변수 이름
CT_RNAME = "rName"
CT_RESOURCE_TAGS = "resource_tags"

# 랜덤 도메인 최상위 (실제 위임되지 않는 도메인)
RANDOM_DOMAIN_TLD = "com"
