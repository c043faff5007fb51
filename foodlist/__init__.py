"""FoodList 레스토랑 탐색/리뷰 API 패키지입니다."""
