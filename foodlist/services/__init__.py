"""도메인 서비스 패키지입니다. 접근 검증, 평점 집계, 프로필 관리 로직을 포함합니다."""
