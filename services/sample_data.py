"""Static sample data: the starter recommendation feed and the demo account"""

from typing import List

from database.entities import RecommendationData


DEMO_USER = {
    "username": "demo_user",
    "email": "demo@example.com",
    "password": "password",
    "full_name": "Demo User",
}

_IMAGE = "https://images.unsplash.com/photo-{}?w=400"


def _rec(product_name, brand, price, image, fit_score, reason, category, size, external_url):
    return RecommendationData(
        product_name=product_name,
        brand=brand,
        price=price,
        image_url=_IMAGE.format(image),
        fit_score=fit_score,
        reason=reason,
        category=category,
        size=size,
        external_url=external_url,
    )


SAMPLE_RECOMMENDATIONS: List[RecommendationData] = [
    # ========== Shirts ==========
    _rec("Premium Cotton Formal Shirt", "Arrow", "₹1,299", "1596755094514-f87e34085b2c", 95,
         "Perfect chest fit, ideal shoulder width for your measurements", "shirts", "L", "https://amazon.in"),
    _rec("Casual Linen Shirt", "Fabindia", "₹899", "1602810318383-e386cc2a3ccf", 92,
         "Excellent fit for casual wear, breathable fabric", "shirts", "L", "https://fabindia.com"),
    _rec("Athletic Fit Polo", "Nike", "₹1,695", "1586790170083-2f9ceadc732d", 89,
         "Great for sports and casual wear, perfect arm length", "shirts", "L", "https://nike.com"),
    _rec("Checked Cotton Shirt", "Peter England", "₹749", "1603252109303-2751441dd157", 88,
         "Classic fit, good for office and casual wear", "shirts", "L", "https://peterengland.com"),

    # ========== Pants ==========
    _rec("Slim Fit Chinos", "Blackberrys", "₹1,399", "1473966968600-fa801b869a1a", 94,
         "Perfect waist fit, ideal leg length for your height", "pants", "34x32", "https://blackberrys.com"),
    _rec("Relaxed Fit Jeans", "Levi's", "₹2,999", "1551698618-1dfe5d97d256", 91,
         "Comfortable waist, good hip room for your measurements", "pants", "34x32", "https://levis.in"),
    _rec("Formal Trousers", "Van Heusen", "₹1,199", "1594633312681-425c7b97ccd1", 87,
         "Professional fit, good for office wear", "pants", "34x32", "https://vanheusenindia.com"),
    _rec("Cargo Pants", "Roadster", "₹899", "1506629905607-690d2f3a6102", 85,
         "Casual fit, good for weekend activities", "pants", "34", "https://myntra.com"),

    # ========== Footwear ==========
    _rec("Leather Formal Shoes", "Bata", "₹2,499", "1549298916-b41d501d3772", 93,
         "Perfect foot length match, comfortable width", "footwear", "9", "https://bata.in"),
    _rec("Running Shoes", "Adidas", "₹3,999", "1542291026-7eec264c27ff", 96,
         "Excellent foot measurements match, great arch support", "footwear", "9", "https://adidas.co.in"),
    _rec("Canvas Sneakers", "Converse", "₹2,799", "1525966222134-fcfa99b8ae77", 89,
         "Good casual fit, comfortable for daily wear", "footwear", "9", "https://converse.in"),
    _rec("Sandals", "Woodland", "₹1,899", "1603808033192-082d6919d3e1", 87,
         "Perfect for summer, good foot width match", "footwear", "9", "https://woodlandworldwide.com"),

    # ========== Jackets ==========
    _rec("Denim Jacket", "Wrangler", "₹2,499", "1551028719-00167b16eac5", 90,
         "Great shoulder fit, perfect for layering", "jackets", "L", "https://wrangler.in"),
    _rec("Bomber Jacket", "H&M", "₹1,999", "1544022613-e87ca75a784a", 88,
         "Trendy fit, good arm length", "jackets", "L", "https://hm.com"),
    _rec("Formal Blazer", "Raymond", "₹4,999", "1507003211169-0a1dd7228f2d", 94,
         "Professional fit, excellent shoulder measurements", "jackets", "L", "https://raymond.in"),
]
